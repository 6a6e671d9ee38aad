# /app/services/prompt_library.py

"""
This file is the central, version-controlled library for the prompts sent to
the chat-completion API. Treating prompts as code and centralizing them here
keeps every generation request reproducible from the repository alone.
"""

from ..models.generation_model import PromptConfig, SystemPrompt

# The user template is filled with plain string replacement, not str.format,
# because the system instructions below legitimately contain braces.
ARTWORK_DESCRIPTION_PLACEHOLDER = "{art_work_description}"

SVG_ARTIST_SYSTEM_PROMPT = """
You are an expert vector illustrator who works exclusively in hand-written SVG.

**--- RULES ---**

1.  **OUTPUT ONLY SVG:** Your entire response must be a single, complete, valid `<svg>...</svg>` document. No prose before or after it.
2.  **SELF-CONTAINED:** Do not reference external images, fonts, or stylesheets. Inline `<style>` blocks, gradients, patterns and filters are allowed.
3.  **VIEWBOX:** Always declare a `viewBox` (prefer `0 0 800 600` unless the subject calls for another aspect ratio) and include `xmlns="http://www.w3.org/2000/svg"`.
4.  **COMPOSITION:** Fill the canvas with a considered composition: background, subject, and supporting detail. Prefer many simple shapes over a few vague ones.
5.  **NO SCRIPT:** Never include `<script>` elements or event-handler attributes.
"""

SVG_QUALITY_SYSTEM_PROMPT = """
Favour recognisable silhouettes, a coherent colour palette, and layering that
reads clearly at thumbnail size. When the description names a known artwork or
artist, evoke its palette, brushwork and composition rather than copying it
literally.
"""

SVG_USER_PROMPT_TEMPLATE = """
Create an SVG illustration of the following:

{art_work_description}
"""

DEFAULT_PROMPT_CONFIG = PromptConfig(
    name="svg-artwork",
    description="Renders a free-text artwork description as a standalone SVG document.",
    system_prompts=[
        SystemPrompt(role="system", content=SVG_ARTIST_SYSTEM_PROMPT.strip()),
        SystemPrompt(role="system", content=SVG_QUALITY_SYSTEM_PROMPT.strip()),
    ],
    user_prompt_template=SVG_USER_PROMPT_TEMPLATE.strip(),
)


def format_user_prompt(template: str, description: str) -> str:
    return template.replace(ARTWORK_DESCRIPTION_PLACEHOLDER, description)
