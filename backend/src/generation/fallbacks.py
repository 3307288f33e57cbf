"""Static placeholder content returned when a generator fails."""

from src.generation.schemas import (
    AcquisitionChannel, AcquisitionStrategy, GeneratedIdea, GuerillaTactic,
    MonetizationStrategy, PricingTier, RevenueProjections, TargetCustomers,
    TimelineStep, ValidationQuestion,
)
from src.ideas.schemas import Idea


def fallback_ideas() -> list[GeneratedIdea]:
    return [
        GeneratedIdea(
            name="API Monitoring Dashboard",
            description=(
                "Developers lack a simple way to watch API uptime and latency. "
                "A lightweight dashboard with customizable alerts fills the gap left by enterprise tools."
            ),
            problem_category="Developer Tools",
            user_pain_points=[
                "Complex monitoring tools",
                "Expensive enterprise solutions",
                "Lack of real-time alerts",
            ],
            revenue_potential=299,
            target_users=500,
        )
    ]


def fallback_questions() -> list[ValidationQuestion]:
    return [
        ValidationQuestion(
            type="problem_validation",
            question="How often do you currently face this problem?",
            purpose="Understand frequency and impact of the problem",
        ),
        ValidationQuestion(
            type="solution_interest",
            question="If a solution existed, how likely would you be to try it?",
            purpose="Gauge interest in potential solution",
        ),
        ValidationQuestion(
            type="pricing_sensitivity",
            question="What would you expect to pay for such a solution monthly?",
            purpose="Understand willingness to pay",
        ),
    ]


def fallback_survey_template(idea: Idea) -> str:
    return (
        f"Survey: {idea.name} Validation\n\n"
        "1. How often do you face this problem?\n"
        "2. What solutions do you currently use?\n"
        "3. What's your biggest challenge with current solutions?\n"
        "4. How much would you pay for a better solution?"
    )


def fallback_monetization() -> MonetizationStrategy:
    return MonetizationStrategy(
        pricing_model="subscription",
        tiers=[
            PricingTier(
                name="Starter", price=19, period="month",
                features=["Core features", "Email support", "1 workspace"],
                target_segment="Solo users and small teams",
            ),
            PricingTier(
                name="Professional", price=49, period="month",
                features=["Everything in Starter", "Team seats", "Integrations", "Custom dashboards"],
                target_segment="Growing startups and agencies",
            ),
            PricingTier(
                name="Enterprise", price=149, period="month",
                features=["White-label", "Unlimited usage", "Priority support", "Custom integrations"],
                target_segment="Larger companies",
            ),
        ],
        value_metrics=[
            "Units of core usage",
            "Alert frequency and channels",
            "Data retention period",
            "Team collaboration features",
        ],
        pricing_psychology=[
            "Anchor with the enterprise tier so the middle tier looks reasonable",
            "Offer an annual discount to improve cash flow",
            "Free trial to reduce friction",
            "Usage-based add-ons for scaling",
        ],
        revenue_projections=RevenueProjections(month_1=500, month_6=2400, month_12=8900),
    )


def fallback_acquisition() -> AcquisitionStrategy:
    return AcquisitionStrategy(
        target_customers=TargetCustomers(
            primary="Independent professionals who feel the problem daily",
            secondary="Small teams at early-stage startups",
            tertiary="Founders building adjacent products",
        ),
        channels=[
            AcquisitionChannel(
                name="Online Communities",
                platforms=["Reddit", "Indie Hackers", "Hacker News"],
                approach="Share genuinely helpful content about the problem",
                effort="Low", timeline="1-2 weeks", expected_reach="500-1000 people",
            ),
            AcquisitionChannel(
                name="Direct Outreach",
                platforms=["LinkedIn", "X", "Email"],
                approach="Reach out to people who publicly mention the problem",
                effort="Medium", timeline="2-4 weeks", expected_reach="100-200 targeted prospects",
            ),
            AcquisitionChannel(
                name="Content Marketing",
                platforms=["Blog", "YouTube tutorials"],
                approach="Publish guides that solve part of the problem for free",
                effort="High", timeline="4-8 weeks", expected_reach="1000-5000 readers",
            ),
        ],
        tactics=[
            GuerillaTactic(
                title="Problem-First Approach",
                description="Start conversations about the problem, not your solution",
                implementation="Comment on relevant posts with concrete insights",
            ),
            GuerillaTactic(
                title="Free Value First",
                description="Give away a small tool or resource before pitching",
                implementation="Ship a free single-purpose utility as a lead magnet",
            ),
            GuerillaTactic(
                title="Community Building",
                description="Build relationships before selling",
                implementation="Help others in target communities every week",
            ),
        ],
        timeline=[
            TimelineStep(week="1", actions="Set up profiles and pick target communities"),
            TimelineStep(week="2", actions="Engage in communities and publish helpful content"),
            TimelineStep(week="3", actions="Begin direct outreach to warm prospects"),
            TimelineStep(week="4", actions="Launch content marketing and gather feedback"),
            TimelineStep(week="5-8", actions="Scale the channels that work and refine messaging"),
        ],
        success_metrics=[
            "Organic traffic",
            "Community engagement",
            "Email signups and trial conversions",
            "Inbound messages",
        ],
    )
