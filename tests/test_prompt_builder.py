"""
Unit tests for prompt construction
"""
import pytest

from idea_studio.services.prompt_builder import PromptBuilder
from idea_studio.services.request_normalizer import normalize_profile


class TestPromptBuilder:
    """Test prompt rendering"""

    @pytest.fixture
    def builder(self):
        return PromptBuilder()

    def test_prompt_embeds_profile(self, builder, profile_payload):
        prompt = builder.build(normalize_profile(profile_payload))

        assert "Location: Seoul" in prompt
        assert "MBTI: ENFP" in prompt
        assert "Occupation: Developer" in prompt
        assert "Budget: 10,000,000" in prompt
        assert "Interests: IT/Tech, Education" in prompt
        assert "Continent: Global" in prompt

    def test_prompt_embeds_json_schema(self, builder, profile_payload):
        prompt = builder.build(normalize_profile(profile_payload))

        for key in ('"title"', '"description"', '"marketData"', '"whyYou"',
                    '"mbtiStrengths"', '"roadmap"', '"products"', '"amazonKeyword"'):
            assert key in prompt

    def test_prompt_is_deterministic(self, builder, profile_payload):
        profile = normalize_profile(profile_payload)
        assert builder.build(profile) == builder.build(profile)
        assert PromptBuilder().build(profile) == builder.build(profile)

    def test_missing_optional_fields_render_unspecified(self, builder):
        profile = normalize_profile({"location": "Busan", "ageGroup": "20s", "mbti": "ISTP"})
        prompt = builder.build(profile)

        assert "Occupation: unspecified" in prompt
        assert "Budget: unspecified" in prompt
        assert "Available time: unspecified" in prompt
        assert "Interests: unspecified" in prompt

    def test_free_tier_omits_market_analysis(self, builder, profile_payload):
        prompt = builder.build(normalize_profile(profile_payload))

        assert '"direction"' not in prompt
        assert "roadmap of 4 steps" in prompt

    def test_pro_tier_requests_market_analysis(self, builder, profile_payload):
        profile_payload["tier"] = "PRO"
        prompt = builder.build(normalize_profile(profile_payload))

        assert '"direction"' in prompt
        assert '"value"' in prompt
        assert "at least 6 steps" in prompt

    def test_template_override_from_file(self, tmp_path, profile_payload):
        template = tmp_path / "custom.j2"
        template.write_text("Idea for {{ mbti }} in {{ location }}", encoding="utf-8")

        builder = PromptBuilder(template_path=str(template))

        assert builder.build(normalize_profile(profile_payload)) == "Idea for ENFP in Seoul"
