"""Regional layout guidance and the bundled sample itinerary."""

from typing import List

from pydantic import BaseModel


class RegionGuide(BaseModel):
    """How a trip's region should be laid out on the 0-100 map canvas."""

    name: str
    layout_hints: List[str]  # e.g. "Frankfurt is at the top (north, low y)"
    must_include: List[str] = []  # named attractions that get their own marker
    background_geography: str


DEFAULT_REGION = RegionGuide(
    name="Southwest Germany & Eastern France",
    layout_hints=[
        "The map covers Southwest Germany and Eastern France.",
        "Frankfurt is at the top (north, low y).",
        "Colmar/Alsace is middle-left (west, high y, low x).",
        "Roth is top-right (east of Frankfurt).",
        "The Black Forest (Titisee/Feldberg/Schluchsee) is bottom-right (south-east).",
    ],
    must_include=[
        "Badeparadies Schwarzwald",
        "Europa-Park",
        "Haut-Koenigsbourg",
        "Montagne des Singes",
    ],
    background_geography=(
        "The border between France (Alsace) and Germany (Black Forest). "
        "Rhine river flowing north-south in the middle. "
        "Mountains (Black Forest) on the right (east), Vosges mountains on the left (west)."
    ),
)


SAMPLE_ITINERARY = """7/2–7/5 Roth 賽事區
7/2 (四) 景點：台灣 → 德國
7/3 (五) 景點：法蘭克福機場 → Roth
7/4 (六) 景點：Roth（Challenge Roth 報到）
7/5 (日) 景點：Roth（比賽日）
7/6–7/7 Camp 1：Kirchzarten
7/6 (一) Roth → Kirchzarten 營地，戶外泳池放鬆
7/7 (二) Badeparadies Schwarzwald 水上樂園，蒂蒂湖 Titisee 湖邊小鎮
7/8–7/9 Camp 2：Feldberg / Titisee
7/8 (三) Feldberg 山區纜車、短步道健行
7/9 (四) Schluchsee 湖畔活動，Feldberg / Titisee 周邊
7/10–7/13 Camp 3：Colmar（阿爾薩斯）
7/10 (五) 上科尼斯堡城堡 Haut-Koenigsbourg、猴山 Montagne des Singes
7/11 (六) 科爾馬 Colmar（小威尼斯區、聖馬丁大教堂），里博維萊 Riquewihr
7/12 (日) Europa-Park 歐洲樂園一日遊
7/13 (一) 埃居山 Eguisheim
7/14–7/15 返回法蘭克福
7/14 (二) 開車返回法蘭克福
7/15 (三) 法蘭克福機場返台"""
