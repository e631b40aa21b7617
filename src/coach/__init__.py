from .adapter import CoachAdapter
from .prompts import PromptTemplates, build_coach_prompt

__all__ = ["CoachAdapter", "PromptTemplates", "build_coach_prompt"]
