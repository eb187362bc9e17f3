"""Enumerations shared by the campaign graph models."""

from enum import Enum


class NodeKind(str, Enum):
    ROOT = "root"
    MASS_DESIRE = "mass_desire"
    PERSONA = "persona"
    STORY = "story"
    BIG_IDEA = "big_idea"
    MECHANISM = "mechanism"
    HOOK = "hook"
    HVCO = "hvco"
    ANGLE = "angle"
    CREATIVE = "creative"


class MarketAwareness(str, Enum):
    UNAWARE = "Unaware"
    PROBLEM_AWARE = "Problem Aware"
    SOLUTION_AWARE = "Solution Aware"
    PRODUCT_AWARE = "Product Aware"
    MOST_AWARE = "Most Aware"


class FunnelStage(str, Enum):
    TOF = "Top of Funnel"
    MOF = "Middle of Funnel"
    BOF = "Bottom of Funnel"


class LanguageRegister(str, Enum):
    CASUAL = "Casual"
    PROFESSIONAL = "Professional"
    SLANG = "Slang"


class StrategyMode(str, Enum):
    DIRECT_RESPONSE = "Direct Response"
    HARD_SELL = "Hard Sell"
    VISUAL_IMPULSE = "Visual Impulse"


class CampaignStage(str, Enum):
    TESTING = "testing"
    SCALING = "scaling"


class TestingTier(str, Enum):
    TIER_1 = "Tier 1"
    TIER_2 = "Tier 2"
    TIER_3 = "Tier 3"


class CreativeFormat(str, Enum):
    # TOF
    UGLY_VISUAL = "Ugly Visual"
    BIG_FONT = "Big Font"
    MEME = "Meme"
    REDDIT_THREAD = "Reddit Thread"
    MS_PAINT = "MS Paint"
    CARTOON = "Cartoon"
    STICKY_NOTE_REALISM = "Sticky Note Realism"
    TWITTER_REPOST = "Twitter Repost"
    HANDHELD_TWEET = "Handheld Tweet"
    REMINDER_NOTIF = "Reminder Notification"
    # MOF
    GMAIL_UX = "Gmail UX"
    LONG_TEXT = "Long Text"
    WHITEBOARD = "Whiteboard"
    IG_STORY_TEXT = "IG Story Text"
    STORY_QNA = "Story Q&A"
    STORY_POLL = "Story Poll"
    CAROUSEL_EDUCATIONAL = "Carousel: Educational"
    CAROUSEL_REAL_STORY = "Carousel: Real Story"
    BEFORE_AFTER = "Before & After"
    MECHANISM_XRAY = "Mechanism X-Ray"
    EDUCATIONAL_RANT = "Educational Rant"
    # BOF
    TESTIMONIAL_HIGHLIGHT = "Testimonial Highlight"
    PRESS_FEATURE = "Press Feature"
    US_VS_THEM = "Us vs Them"
    BENEFIT_POINTERS = "Benefit Pointers"
    CAROUSEL_TESTIMONIAL = "Carousel: Testimonial"
    LEAD_MAGNET_3D = "Lead Magnet 3D"
    UGC_MIRROR = "UGC Mirror"
    DM_NOTIFICATION = "DM Notification"
    CHAT_CONVERSATION = "Chat Conversation"
    # Not offered in the picker groups, still renderable
    BILLBOARD = "Billboard"
    CAROUSEL_PANORAMA = "Carousel: Panorama"
    CAROUSEL_PHOTO_DUMP = "Carousel: Photo Dump"
    OLD_ME_VS_NEW_ME = "Old Me vs New Me"
    PHONE_NOTES = "Phone Notes"
    AESTHETIC_MINIMAL = "Aesthetic Minimal"
    REELS_THUMBNAIL = "Reels Thumbnail"
    SOCIAL_COMMENT_STACK = "Social Comment Stack"
    VENN_DIAGRAM = "Venn Diagram"
    GRAPH_CHART = "Graph Chart"
    TIMELINE_JOURNEY = "Timeline Journey"
    ANNOTATED_PRODUCT = "Annotated Product"
    SEARCH_BAR = "Search Bar"
    POV_HANDS = "POV Hands"
    COLLAGE_SCRAPBOOK = "Collage Scrapbook"
    CHECKLIST_TODO = "Checklist To-Do"

    @property
    def is_carousel(self) -> bool:
        return "Carousel" in self.value


FORMAT_GROUPS: dict[str, list[CreativeFormat]] = {
    "TOF (Unaware/Viral)": [
        CreativeFormat.UGLY_VISUAL,
        CreativeFormat.BIG_FONT,
        CreativeFormat.MEME,
        CreativeFormat.REDDIT_THREAD,
        CreativeFormat.MS_PAINT,
        CreativeFormat.CARTOON,
        CreativeFormat.STICKY_NOTE_REALISM,
        CreativeFormat.TWITTER_REPOST,
        CreativeFormat.HANDHELD_TWEET,
        CreativeFormat.REMINDER_NOTIF,
    ],
    "MOF (Education/Trust)": [
        CreativeFormat.GMAIL_UX,
        CreativeFormat.LONG_TEXT,
        CreativeFormat.WHITEBOARD,
        CreativeFormat.IG_STORY_TEXT,
        CreativeFormat.STORY_QNA,
        CreativeFormat.STORY_POLL,
        CreativeFormat.CAROUSEL_EDUCATIONAL,
        CreativeFormat.CAROUSEL_REAL_STORY,
        CreativeFormat.BEFORE_AFTER,
        CreativeFormat.MECHANISM_XRAY,
        CreativeFormat.EDUCATIONAL_RANT,
    ],
    "BOF (Conversion/Offer)": [
        CreativeFormat.TESTIMONIAL_HIGHLIGHT,
        CreativeFormat.PRESS_FEATURE,
        CreativeFormat.US_VS_THEM,
        CreativeFormat.BENEFIT_POINTERS,
        CreativeFormat.CAROUSEL_TESTIMONIAL,
        CreativeFormat.LEAD_MAGNET_3D,
        CreativeFormat.UGC_MIRROR,
        CreativeFormat.DM_NOTIFICATION,
        CreativeFormat.CHAT_CONVERSATION,
    ],
}
