"""Quiz question catalog.

Defines every question the fit quiz asks, the tokens each accepts and
the default used when an answer is missing or invalid. The profile
builder reads option values from here, so this is the single source of
truth for valid answer tokens.
"""

from typing import Optional

from .schema import QuestionType, QuizOption, QuizQuestion


def _options(*pairs: tuple[str, str]) -> list[QuizOption]:
    return [QuizOption(value=value, label=label) for value, label in pairs]


QUIZ_QUESTIONS: list[QuizQuestion] = [
    QuizQuestion(
        id="time_weekly",
        question="How many hours per week can you dedicate to building?",
        type=QuestionType.SINGLE,
        options=_options(
            ("2-5", "2-5 hours"),
            ("6-10", "6-10 hours"),
            ("11-20", "11-20 hours"),
            ("20+", "20+ hours (nearly full-time)"),
        ),
        default="6-10",
    ),
    QuizQuestion(
        id="tech_comfort",
        question="What's your comfort level with coding or no-code tools?",
        type=QuestionType.SINGLE,
        options=_options(
            ("none", "I can't code and don't want to learn"),
            ("nocode", "I can use no-code tools (Webflow, Bubble, etc.)"),
            ("some", "I can code simple things or copy/paste code"),
            ("dev", "I'm a developer"),
        ),
        default="some",
    ),
    QuizQuestion(
        id="support_tolerance",
        question="How much customer support are you willing to do?",
        type=QuestionType.SINGLE,
        options=_options(
            ("none", "Zero - I want something passive"),
            ("low", "Minimal - async email only"),
            ("medium", "Some - a few hours per week"),
            ("high", "Whatever it takes to grow"),
        ),
        default="low",
    ),
    QuizQuestion(
        id="revenue_goal",
        question="What's your revenue goal in the next 6 months?",
        type=QuestionType.SINGLE,
        options=_options(
            ("side", "$500-1k/mo (side income)"),
            ("ramen", "$2-5k/mo (ramen profitable)"),
            ("salary", "$5-10k/mo (replace salary)"),
            ("scale", "$10k+/mo (scale mode)"),
        ),
        default="side",
    ),
    QuizQuestion(
        id="build_preference",
        question="How do you prefer to build?",
        type=QuestionType.SINGLE,
        options=_options(
            ("solo", "Solo - I do everything myself"),
            ("ai", "Solo + AI assistants"),
            ("freelance", "I'll outsource dev/design work"),
            ("cofounder", "Looking for a cofounder"),
        ),
        default="solo",
    ),
    QuizQuestion(
        id="audience_access",
        question="Do you have access to any of these audiences already?",
        type=QuestionType.MULTI,
        options=_options(
            ("developers", "Developers / tech people"),
            ("smb", "Small business owners"),
            ("creators", "Creators / influencers"),
            ("enterprise", "Enterprise / corporate contacts"),
            ("none", "No existing audience"),
        ),
        default=[],
    ),
    QuizQuestion(
        id="risk_tolerance",
        question="What's your risk tolerance for launching?",
        type=QuestionType.SINGLE,
        options=_options(
            ("low", "Low - I need validation before building anything"),
            ("medium", "Medium - I'll build a quick MVP to test"),
            ("high", "High - I'll ship fast and figure it out"),
        ),
        default="medium",
    ),
    QuizQuestion(
        id="existing_skills",
        question="What skills do you bring to the table? (select all that apply)",
        type=QuestionType.MULTI,
        options=_options(
            ("design", "Design / UI"),
            ("marketing", "Marketing / Growth"),
            ("sales", "Sales"),
            ("writing", "Writing / Content"),
            ("coding", "Coding"),
            ("ops", "Operations / Systems"),
        ),
        default=[],
    ),
    # Personalization questions
    QuizQuestion(
        id="interest_themes",
        question="Which areas interest you most?",
        type=QuestionType.MULTI,
        options=_options(
            ("money", "Finance / Money"),
            ("health", "Health / Fitness"),
            ("career", "Productivity / Career"),
            ("tech", "Tech / Dev tools"),
            ("gaming", "Gaming"),
            ("shopping", "Shopping / Deals"),
            ("home", "Home / DIY"),
            ("learning", "Learning"),
            ("travel", "Travel"),
            ("none", "No preference"),
        ),
        default=[],
        personalization=True,
    ),
    QuizQuestion(
        id="avoid_list",
        question="Is there anything you definitely want to avoid?",
        type=QuestionType.MULTI,
        options=_options(
            ("calls", "Sales calls / demos"),
            ("social", "Posting on social media"),
            ("support", "Heavy customer support"),
            ("content", "SEO / content writing"),
            ("ads", "Paid advertising"),
            ("community", "Community building"),
            ("integrations", "Complex integrations"),
            ("none", "Nothing in particular"),
        ),
        default=[],
        personalization=True,
    ),
    QuizQuestion(
        id="distribution_comfort",
        question="Which way of finding customers are you most comfortable with?",
        type=QuestionType.SINGLE,
        options=_options(
            ("seo", "Search / SEO content"),
            ("communities", "Online communities"),
            ("ads", "Paid ads"),
            ("partnerships", "Partnerships / affiliates"),
            ("unsure", "Not sure yet"),
        ),
        default="unsure",
        personalization=True,
    ),
    QuizQuestion(
        id="quit_reason",
        question="If you've abandoned a side project before, why?",
        type=QuestionType.SINGLE,
        options=_options(
            ("motivation", "Lost motivation"),
            ("stuck", "Got stuck technically"),
            ("no_users", "Couldn't find users"),
            ("time", "Ran out of time"),
            ("never", "Never started one"),
        ),
        default="",
        personalization=True,
    ),
    QuizQuestion(
        id="optional_notes",
        question="Anything else we should know?",
        type=QuestionType.TEXT,
        default="",
        personalization=True,
    ),
]

_QUESTIONS_BY_ID = {q.id: q for q in QUIZ_QUESTIONS}


def get_question(question_id: str) -> Optional[QuizQuestion]:
    """Look up a quiz question by id."""
    return _QUESTIONS_BY_ID.get(question_id)


def option_values(question_id: str) -> list[str]:
    """Valid answer tokens for a question (empty for free text)."""
    question = _QUESTIONS_BY_ID.get(question_id)
    return question.option_values() if question else []
