"""
Badge catalog seeded on first start
"""
from worklogix.models.shared.enums import BadgeType

BADGE_DEFINITIONS = [
    {
        "name": "Early Bird",
        "description": "Logged in before 9:00 AM for 10+ consecutive days",
        "icon": "🌞",
        "criteria": "10+ consecutive on-time logins",
        "badge_type": BadgeType.STREAK,
    },
    {
        "name": "Perfect Month",
        "description": "30 days perfect attendance",
        "icon": "🏆",
        "criteria": "No absences in a month",
        "badge_type": BadgeType.MONTHLY,
    },
    {
        "name": "Reliable Performer",
        "description": "No absences in a month",
        "icon": "💼",
        "criteria": "Perfect attendance for one month",
        "badge_type": BadgeType.MONTHLY,
    },
    {
        "name": "Work Warrior",
        "description": "Highest attendance streak",
        "icon": "🔥",
        "criteria": "Longest active streak",
        "badge_type": BadgeType.STREAK,
    },
    {
        "name": "Dedicated Star",
        "description": "Maintains 90-day streak",
        "icon": "💫",
        "criteria": "90+ consecutive days of attendance",
        "badge_type": BadgeType.STREAK,
    },
    {
        "name": "Consistent Star",
        "description": "Consistent monthly performer",
        "icon": "⭐",
        "criteria": "High monthly scores",
        "badge_type": BadgeType.MONTHLY,
    },
]
