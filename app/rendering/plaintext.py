from typing import Any, Dict, List


def render_plaintext(context: Dict[str, Any]) -> str:
    """
    Render a readable plaintext briefing from the context.

    Args:
        context: Briefing context built by compose_briefing_model

    Returns:
        Plaintext briefing string
    """
    lines: List[str] = []

    # Header
    lines.append(f"Meeting Reflection Briefing - {context.get('title', '')}")
    lines.append("=" * 50)
    lines.append("")
    lines.append("Your meeting starts soon. Please review your reflection answers to prepare.")
    lines.append("")
    lines.append(f"Time: {context.get('start_human', '')}")
    lines.append(f"Location: {context.get('location', '')}")
    lines.append("")

    lines.append("Your Reflection Summary")
    lines.append("-" * 60)
    items = context.get("items", [])
    if not items:
        lines.append(context.get("no_answers_text", ""))
    for i, item in enumerate(items, 1):
        lines.append(f"{i}. {item.get('question', '')}")
        lines.append(f"   {item.get('answer', '')}")
        lines.append("")

    lines.append("")
    lines.append(context.get("app_name", ""))
    return "\n".join(lines)
