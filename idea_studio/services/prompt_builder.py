"""
Prompt construction for idea generation
"""
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, PackageLoader, StrictUndefined, Template

from idea_studio.logging_config import logger
from idea_studio.schemas import Profile, Tier


TEMPLATE_NAME = "idea_prompt.j2"
UNSPECIFIED = "unspecified"

FREE_ROADMAP_STEPS = 4
PRO_ROADMAP_STEPS = 6


class PromptBuilder:
    """Renders the generation prompt for a profile"""

    def __init__(self, template_path: Optional[str] = None):
        """
        Initialize prompt builder

        Args:
            template_path: Optional Jinja2 template replacing the packaged one
        """
        self.template = self._load_template(template_path)

    def _load_template(self, template_path: Optional[str]) -> Template:
        if template_path:
            path = Path(template_path)
            loader = FileSystemLoader(str(path.parent))
            name = path.name
            logger.info(f"Loading prompt template from {path}")
        else:
            loader = PackageLoader("idea_studio", "prompts")
            name = TEMPLATE_NAME

        env = Environment(
            loader=loader,
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
        )
        return env.get_template(name)

    @staticmethod
    def template_context(profile: Profile) -> Dict[str, Any]:
        """Profile fields as rendered in the prompt"""
        pro = profile.tier == Tier.PRO
        return {
            "location": profile.location or UNSPECIFIED,
            "age_group": profile.age_group or UNSPECIFIED,
            "mbti": profile.mbti,
            "occupation": profile.occupation or UNSPECIFIED,
            "budget": f"{profile.budget:,}" if profile.budget else UNSPECIFIED,
            "time_commitment": profile.time_commitment or UNSPECIFIED,
            "interests": ", ".join(profile.interests) or UNSPECIFIED,
            "continent": profile.continent,
            "growth_speed": profile.growth_speed,
            "market_size": profile.market_size,
            "pro": pro,
            "roadmap_steps": PRO_ROADMAP_STEPS if pro else FREE_ROADMAP_STEPS,
        }

    def build(self, profile: Profile) -> str:
        """
        Build the prompt for a profile

        Args:
            profile: Normalized profile

        Returns:
            Prompt text embedding the profile and the expected JSON schema
        """
        return self.template.render(**self.template_context(profile))
