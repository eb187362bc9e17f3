"""Prompt loading and user-message building blocks."""

from pathlib import Path

from ..models import (
    CreativeFormat,
    Lineage,
    MarketAwareness,
    ProjectContext,
    StrategyMode,
)

PROMPTS_DIR = Path(__file__).parent.parent / "prompts"


def load_prompt(name: str) -> str:
    """Load a system prompt by name."""
    path = PROMPTS_DIR / f"{name}.txt"
    if not path.exists():
        raise FileNotFoundError(f"Prompt file not found: {path}")
    return path.read_text(encoding="utf-8").strip()


def project_brief(project: ProjectContext) -> list[str]:
    """Project lines shared by every user message."""
    lines = [
        f"Product: {project.product_name}",
        f"Description: {project.product_description}",
        f"Target Audience: {project.target_audience}",
        f"Target Country: {project.target_country}",
        f"Market Awareness: {project.market_awareness.value}",
        f"Funnel Stage: {project.funnel_stage.value}",
        f"Language Register: {project.language_register.value}",
        f"Strategy Mode: {project.strategy_mode.value}",
    ]
    if project.offer:
        lines.append(f"Offer: {project.offer}")
    if project.brand_voice:
        lines.append(f"Brand Voice: {project.brand_voice}")
    return lines


def context_lines(bundle: Lineage) -> list[str]:
    """Render whatever ancestor context is present."""
    lines = []
    if bundle.mass_desire:
        lines.append(f"Mass Desire: {bundle.mass_desire.headline} - {bundle.mass_desire.description}")
    if bundle.persona:
        lines.append(f"Persona: {bundle.persona.name} - {bundle.persona.profile}")
        if bundle.persona.visceral_symptoms:
            lines.append(f"Symptoms: {', '.join(bundle.persona.visceral_symptoms)}")
    if bundle.story:
        lines.append(f"Narrative Context: {bundle.story.narrative}")
    if bundle.big_idea:
        lines.append(f"Big Idea Shift: {bundle.big_idea.concept}")
    if bundle.mechanism:
        lines.append(f"Mechanism Logic: {bundle.mechanism.ums}")
    if bundle.hook:
        lines.append(f"Hook: {bundle.hook.text}")
    if bundle.hvco:
        lines.append(f"Lead Magnet: {bundle.hvco.title} - {bundle.hvco.hook}")
    return lines


def strategy_instruction(mode: StrategyMode) -> str:
    if mode == StrategyMode.HARD_SELL:
        return (
            "PRIORITY: CONVERSION & OFFER (HARD SELL)\n"
            "- Visual: Hero shot or product in action. High clarity.\n"
            "- Embedded Text: Urgent, scarcity-driven (e.g. \"50% OFF\", \"Last Chance\").\n"
            "- Copy Tone: Urgent, direct, promotional."
        )
    if mode == StrategyMode.VISUAL_IMPULSE:
        return (
            "PRIORITY: AESTHETIC & DESIRE (VISUAL IMPULSE)\n"
            "- Visual: Aspirational, Pinterest-style, lifestyle focus.\n"
            "- Embedded Text: Minimalist (1-3 words max) or no text if better.\n"
            "- Copy Tone: Minimalist, identity-driven."
        )
    return (
        "PRIORITY: PATTERN INTERRUPT (DIRECT RESPONSE)\n"
        "- Visual: Start with the problem/pain or a mechanism x-ray.\n"
        "- Embedded Text: The hook or question that stops the scroll.\n"
        "- Copy Tone: Empathetic, raw, stop-the-scroll energy."
    )


_FORMAT_TEXT_RULES: dict[CreativeFormat, str] = {
    CreativeFormat.GMAIL_UX: "Visual must look like a Gmail interface. Embedded Text is the subject line.",
    CreativeFormat.TWITTER_REPOST: "Visual must look like a Tweet. Embedded Text is the tweet content.",
    CreativeFormat.REMINDER_NOTIF: "Visual must look like a lockscreen notification. Embedded Text is the notification message.",
    CreativeFormat.BILLBOARD: "Visual is a billboard. Embedded Text is the billboard slogan.",
}


def format_instruction(fmt: CreativeFormat) -> str:
    return _FORMAT_TEXT_RULES.get(fmt, "")


def awareness_visual_logic(awareness: MarketAwareness) -> str:
    """Visual rule for how much the prospect already knows."""
    if awareness == MarketAwareness.UNAWARE:
        return (
            "UNAWARE STAGE: Do not show the product packaging. Focus on a visual metaphor, "
            "an anomaly, or a shocking specific symptom. The goal is curiosity and pattern interrupt."
        )
    if awareness == MarketAwareness.PROBLEM_AWARE:
        return (
            "PROBLEM AWARE STAGE: Focus on the symptom. Show the visceral pain and the 'before' state. "
            "Product can appear subtly as a saviour, but pain is the hero."
        )
    if awareness == MarketAwareness.SOLUTION_AWARE:
        return (
            "SOLUTION AWARE STAGE: Focus on the mechanism. Show us vs them, a diagram, or an x-ray "
            "of the effect. Show why the old way failed and this new way works."
        )
    return (
        "MOST AWARE STAGE: Hero shot and offer. Show the product with a value stack "
        "(product + bonuses + guarantee). High contrast, focus on the offer and scarcity."
    )


_FORMAT_VISUAL_GUIDES: dict[CreativeFormat, str] = {
    CreativeFormat.CAROUSEL_EDUCATIONAL: "High-value slide deck. Bold headlines, flat vector icons, clean grid.",
    CreativeFormat.CAROUSEL_TESTIMONIAL: "Stack of review cards with 5-star ratings over a high-end product shot.",
    CreativeFormat.CAROUSEL_PANORAMA: "Seamless wide image split across slides. Visual continuity that forces swiping.",
    CreativeFormat.CAROUSEL_PHOTO_DUMP: "Raw, unedited weekend-dump vibe. Flash photography, candid shots.",
    CreativeFormat.CAROUSEL_REAL_STORY: "UGC journey. Raw selfies and day-in-the-life frames, zero studio feel.",
    CreativeFormat.BIG_FONT: "Massive, aggressive typography filling 80% of the frame. High contrast.",
    CreativeFormat.GMAIL_UX: "Gmail inbox interface. White background, star icon, subject line in bold.",
    CreativeFormat.BILLBOARD: "Realistic outdoor billboard on a highway or skyscraper. Cinematic lighting.",
    CreativeFormat.UGLY_VISUAL: "Intentionally amateur and low-fi. Clashing colors, MS Paint arrows, low-res collage.",
    CreativeFormat.MS_PAINT: "Crude MS Paint drawings. Amateur brush strokes, neon colors.",
    CreativeFormat.REDDIT_THREAD: "Reddit discussion UI, dark mode, upvote arrows, u/username, award icons.",
    CreativeFormat.MEME: "Classic meme format. Impact font caption over a relatable, funny image.",
    CreativeFormat.LONG_TEXT: "Native mini sales letter. Off-white background, clean serif typography.",
    CreativeFormat.CARTOON: "Hand-drawn editorial cartoon illustrating a relatable pain point.",
    CreativeFormat.BEFORE_AFTER: "Split-screen transformation. Left gritty problem, right vibrant solution.",
    CreativeFormat.WHITEBOARD: "Educational drawing on a real whiteboard, hand visible drawing a diagram.",
    CreativeFormat.EDUCATIONAL_RANT: "Green screen effect. A person talking over a research paper or graph.",
    CreativeFormat.OLD_ME_VS_NEW_ME: "Split screen comparing body language. Slouching vs confident.",
    CreativeFormat.PRESS_FEATURE: "Featured article layout. Large headline and a professional hero image.",
    CreativeFormat.LEAD_MAGNET_3D: "3D render of a physical book or report floating with depth shadows.",
    CreativeFormat.MECHANISM_XRAY: "Scientific x-ray or 3D cross-section showing the mechanism at work.",
    CreativeFormat.IG_STORY_TEXT: "Native IG story. Typewriter font over a blurry candid photo.",
    CreativeFormat.TWITTER_REPOST: "X/Twitter post screenshot with profile pic, handle and like icons.",
    CreativeFormat.PHONE_NOTES: "Apple Notes UI with date stamp and marker scribbles.",
    CreativeFormat.AESTHETIC_MINIMAL: "High-end editorial, beige tones, serif fonts, plenty of white space.",
    CreativeFormat.STORY_POLL: "IG story with an interactive poll sticker in the center. UGC background.",
    CreativeFormat.STORY_QNA: "IG story with a Q&A sticker in the center. UGC background.",
    CreativeFormat.REELS_THUMBNAIL: "High-energy thumbnail. Bold text, expressive faces, high saturation.",
    CreativeFormat.DM_NOTIFICATION: "Stacked iPhone lockscreen notifications with glassmorphism blur.",
    CreativeFormat.UGC_MIRROR: "Raw mirror selfie with flash and a messy room background.",
    CreativeFormat.HANDHELD_TWEET: "POV of a hand holding a phone displaying a tweet. Cafe background.",
    CreativeFormat.SOCIAL_COMMENT_STACK: "3-5 comment bubbles stacked over a raw product shot.",
    CreativeFormat.CHAT_CONVERSATION: "iMessage/WhatsApp thread with a 'Typing...' indicator.",
    CreativeFormat.REMINDER_NOTIF: "iPhone reminder notification bubble. Minimalist and urgent.",
    CreativeFormat.US_VS_THEM: "Binary comparison table. Vibrant 'us' vs grayscale 'them', checks vs crosses.",
    CreativeFormat.VENN_DIAGRAM: "Overlapping circles showing the sweet spot of the solution.",
    CreativeFormat.TESTIMONIAL_HIGHLIGHT: "Screenshot of a review with a yellow highlight over the benefit sentence.",
    CreativeFormat.GRAPH_CHART: "Rising line graph or bar chart visualizing results.",
    CreativeFormat.TIMELINE_JOURNEY: "Horizontal timeline (Day 1, Day 7, Day 30) of the transformation.",
    CreativeFormat.BENEFIT_POINTERS: "Hero product shot with thin leader lines pointing to features.",
    CreativeFormat.ANNOTATED_PRODUCT: "Hero product shot with thin leader lines pointing to features.",
    CreativeFormat.SEARCH_BAR: "Google search simulation with the pain point typed in.",
    CreativeFormat.POV_HANDS: "First-person POV looking down at hands using the product.",
    CreativeFormat.COLLAGE_SCRAPBOOK: "Mixed media collage. Ripped paper, tape, polaroids.",
    CreativeFormat.CHECKLIST_TODO: "Handwritten to-do list. Problems crossed out, solutions checked.",
}

_NATIVE_STORY_FORMATS = {
    CreativeFormat.IG_STORY_TEXT,
    CreativeFormat.PHONE_NOTES,
    CreativeFormat.LONG_TEXT,
    CreativeFormat.UGC_MIRROR,
}


def format_visual_guide(fmt: CreativeFormat) -> str:
    return "Style: " + _FORMAT_VISUAL_GUIDES.get(
        fmt, "High-quality, native social media asset. Realistic lighting, authentic texture."
    )


def style_instruction(project: ProjectContext, fmt: CreativeFormat) -> str:
    if fmt in _NATIVE_STORY_FORMATS:
        return "Style: AMATEUR UGC. No professional lighting. Looks like a friend sent it."
    if project.strategy_mode == StrategyMode.HARD_SELL:
        return "Style: HARD HITTING DIRECT RESPONSE. High contrast, grit and urgency."
    return "Style: Professional ad."
