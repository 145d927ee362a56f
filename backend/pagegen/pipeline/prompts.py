"""HTML Generation Prompt Templates

Prompt design for the code generation call: takes the normalized context
string plus the page requirements and asks for one standalone HTML file.

Framework guidance is injected from a fixed lookup keyed by Framework.
"""

from __future__ import annotations

from ..models import Framework, GenerationRequirements

GENERATION_PROMPT = """\
You are an expert web developer. Create a complete, standalone HTML file based \
on the following requirements:

CONTEXT:
{context}

REQUIREMENTS:
- Page/Component name: {name}
- Framework: {framework}
- Responsive design: {responsive}
- Include animations: {animations}
- Interactive elements: {interactive}

TECHNICAL REQUIREMENTS:
- Create ONE complete HTML file with everything inline
- Include ALL CSS in <style> tags in the <head>
- Include ALL JavaScript in <script> tags (if needed)
- Use semantic HTML5 elements
- Ensure the page is fully functional and self-contained
- Add proper meta tags for responsive design
{optional_requirements}
FRAMEWORK INSTRUCTIONS:
{framework_instructions}

IMPORTANT:
- Return ONLY the complete HTML code, no explanations
- Everything must be in ONE file (no external dependencies except CDN links \
if absolutely necessary)
- Use modern HTML5, CSS3, and vanilla JavaScript
- Ensure the code is clean, well-commented, and production-ready
- Add proper doctype, lang attribute, and meta tags

Generate the complete HTML file:"""

FRAMEWORK_VANILLA = """\
- Use pure HTML, CSS, and JavaScript (no external frameworks)
- Write custom CSS with modern features (Grid, Flexbox, CSS Variables)
- Use CSS custom properties for theming
- Implement responsive design with CSS media queries
- Keep all code self-contained and framework-free"""

FRAMEWORK_TAILWIND = """\
- Use Tailwind CSS via CDN
- Include Tailwind CSS: <script src="https://cdn.tailwindcss.com"></script>
- Use Tailwind utility classes for all styling
- Follow Tailwind design principles and responsive patterns
- Use Tailwind's color palette and spacing system"""

FRAMEWORK_BOOTSTRAP = """\
- Use Bootstrap 5 CSS framework via CDN
- Include Bootstrap CSS: <link href="https://cdn.jsdelivr.net/npm/bootstrap@5.3.0/dist/css/bootstrap.min.css" rel="stylesheet">
- Include Bootstrap JS if needed: <script src="https://cdn.jsdelivr.net/npm/bootstrap@5.3.0/dist/js/bootstrap.bundle.min.js"></script>
- Use Bootstrap classes for layout, components, and utilities
- Follow Bootstrap design system and component patterns"""

FRAMEWORK_INSTRUCTIONS = {
    Framework.VANILLA: FRAMEWORK_VANILLA,
    Framework.TAILWIND: FRAMEWORK_TAILWIND,
    Framework.BOOTSTRAP: FRAMEWORK_BOOTSTRAP,
}


def _flag(value: bool) -> str:
    return "true" if value else "false"


def get_framework_instructions(framework: Framework) -> str:
    return FRAMEWORK_INSTRUCTIONS[Framework(framework)]


def build_generation_prompt(context: str, requirements: GenerationRequirements) -> str:
    """Build the code generation prompt.

    User text (context, name) is interpolated as-is.
    """
    optional = []
    if requirements.responsive:
        optional.append("- Implement responsive design with CSS media queries")
    if requirements.animations:
        optional.append("- Include smooth CSS animations and transitions")
    if requirements.interactive:
        optional.append("- Add JavaScript for interactive functionality")

    framework = Framework(requirements.framework)
    return GENERATION_PROMPT.format(
        context=context,
        name=requirements.name,
        framework=framework.value,
        responsive=_flag(requirements.responsive),
        animations=_flag(requirements.animations),
        interactive=_flag(requirements.interactive),
        optional_requirements="".join(f"{line}\n" for line in optional),
        framework_instructions=get_framework_instructions(framework),
    )
