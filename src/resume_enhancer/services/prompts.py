"""Prompt templates for resume enhancement."""

from resume_enhancer.models.resume import EnhancementType

SYSTEM_PROMPT = (
    "You are a professional resume writer specializing in trade and technical "
    "resumes. Format your response in clean, professional markdown."
)

PROMPT_TEMPLATES: dict[EnhancementType, str] = {
    EnhancementType.SKILLS_CERTIFICATIONS: (
        "Enhance the following resume by highlighting trade skills, licenses, "
        "and certifications. Make them prominent and well-formatted:\n\n{content}"
    ),
    EnhancementType.PROJECT_EXPERIENCE: (
        "Enhance the following resume by showcasing completed projects and "
        "technical expertise. Use strong action verbs:\n\n{content}"
    ),
    EnhancementType.CLIENT_QUALITY: (
        "Enhance the following resume by emphasizing customer satisfaction, "
        "quality work, and client success stories:\n\n{content}"
    ),
}


def build_prompt(enhancement_type: str, content: str) -> str:
    """Render the prompt for a type; unknown types use the client-quality template."""
    template = PROMPT_TEMPLATES[EnhancementType.resolve(enhancement_type)]
    return template.format(content=content)
