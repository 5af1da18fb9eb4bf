"""Tests for decorative character generation."""

import random

import pytest

from travel_map.decorations import CHARACTER_ROSTER, CharacterSpec, generate_decorations
from travel_map.placement import ANCHOR_ZONES, DECORATION_SCALE


def respond_by_prompt(image_response, failing=()):
    """generate_content double that fails for prompts containing any of `failing`."""
    def respond(model, contents, config):
        if any(marker in contents for marker in failing):
            raise RuntimeError("rate limited")
        return image_response()
    return respond


class TestRoster:

    def test_four_characters(self):
        assert len(CHARACTER_ROSTER) == 4
        assert [c.name for c in CHARACTER_ROSTER] == ["吉伊卡娃", "小八貓", "烏薩奇", "栗子饅頭"]

    def test_every_character_has_prompt_and_caption(self):
        for character in CHARACTER_ROSTER:
            assert "sticker" in character.prompt
            assert character.default_message

    def test_one_anchor_per_character(self):
        assert len(ANCHOR_ZONES) >= len(CHARACTER_ROSTER)


@pytest.mark.asyncio
class TestGenerateDecorations:

    async def test_all_succeed(self, mock_client, image_response):
        mock_client.models.generate_content.side_effect = respond_by_prompt(image_response)

        decorations = await generate_decorations(mock_client, rng=random.Random(1))

        assert [d.id for d in decorations] == ["char-0", "char-1", "char-2", "char-3"]
        assert [d.name for d in decorations] == [c.name for c in CHARACTER_ROSTER]
        assert [d.message for d in decorations] == [c.default_message for c in CHARACTER_ROSTER]
        assert all(d.image_url.startswith("data:image/png;base64,") for d in decorations)
        assert mock_client.models.generate_content.call_count == 4

    async def test_positions_near_anchors(self, mock_client, image_response):
        mock_client.models.generate_content.side_effect = respond_by_prompt(image_response)

        decorations = await generate_decorations(mock_client, rng=random.Random(5))

        for index, decoration in enumerate(decorations):
            anchor_x, anchor_y, _ = ANCHOR_ZONES[index]
            assert abs(decoration.x - anchor_x) <= 5
            assert abs(decoration.y - anchor_y) <= 5
            assert -10 <= decoration.rotation <= 10
            assert decoration.scale == DECORATION_SCALE

    async def test_seeded_rng_gives_repeatable_layout(self, mock_client, image_response):
        mock_client.models.generate_content.side_effect = respond_by_prompt(image_response)

        first = await generate_decorations(mock_client, rng=random.Random(42))
        second = await generate_decorations(mock_client, rng=random.Random(42))

        assert [(d.x, d.y, d.rotation) for d in first] == [(d.x, d.y, d.rotation) for d in second]

    async def test_partial_failure_drops_failed_characters(self, mock_client, image_response):
        mock_client.models.generate_content.side_effect = respond_by_prompt(
            image_response, failing=("Hachiware", "Kurimanju")
        )

        decorations = await generate_decorations(mock_client, rng=random.Random(1))

        assert [d.id for d in decorations] == ["char-0", "char-2"]
        assert [d.name for d in decorations] == ["吉伊卡娃", "烏薩奇"]

    async def test_all_fail_returns_empty_without_raising(self, mock_client):
        mock_client.models.generate_content.side_effect = RuntimeError("quota exceeded")

        assert await generate_decorations(mock_client) == []

    async def test_missing_image_counts_as_failure(self, mock_client, empty_image_response):
        mock_client.models.generate_content.return_value = empty_image_response

        assert await generate_decorations(mock_client) == []

    async def test_custom_roster_wraps_anchors(self, mock_client, image_response):
        mock_client.models.generate_content.side_effect = respond_by_prompt(image_response)
        roster = [CharacterSpec(name=f"c{i}", prompt=f"sticker {i}", default_message="hi") for i in range(5)]

        decorations = await generate_decorations(mock_client, roster=roster, rng=random.Random(2))

        assert len(decorations) == 5
        assert abs(decorations[4].x - ANCHOR_ZONES[0][0]) <= 5

    async def test_empty_roster(self, mock_client):
        assert await generate_decorations(mock_client, roster=[]) == []
        mock_client.models.generate_content.assert_not_called()
