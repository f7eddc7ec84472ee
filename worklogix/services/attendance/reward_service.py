import logging
from datetime import date
from typing import Any, Dict, List, Optional
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from worklogix.db.seeds.badges import BADGE_DEFINITIONS
from worklogix.models.attendance.attendance_log import AttendanceLog
from worklogix.models.attendance.attendance_reward import AttendanceReward
from worklogix.models.attendance.badge import Badge, UserBadge
from worklogix.models.auth.user import User
from worklogix.models.shared.enums import AttendanceStatus
from worklogix.services.attendance.scoring import day_gap, is_attended

logger = logging.getLogger(__name__)

STREAK_BONUS_AT = 5
STREAK_BONUS_POINTS = 10

# Streak length -> badge awarded when the streak reaches it
STREAK_BADGES = {
    10: "Early Bird",
    30: "Perfect Month",
    90: "Dedicated Star",
}


class RewardService:
    """Points, streaks and badges per (user, company)"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_reward(self, user_id: int, company_id: int) -> Optional[AttendanceReward]:
        result = await self.db.execute(
            select(AttendanceReward).where(
                AttendanceReward.user_id == user_id,
                AttendanceReward.company_id == company_id
            )
        )
        return result.scalar_one_or_none()

    async def get_or_create_reward(self, user_id: int, company_id: int) -> AttendanceReward:
        reward = await self.get_reward(user_id, company_id)
        if reward:
            return reward

        reward = AttendanceReward(
            user_id=user_id,
            company_id=company_id,
            total_points=0,
            current_streak=0,
            longest_streak=0,
            monthly_score=0,
            perfect_months=0,
        )
        self.db.add(reward)
        await self.db.commit()
        await self.db.refresh(reward)
        return reward

    async def add_points(self, user_id: int, company_id: int, points: int) -> AttendanceReward:
        reward = await self.get_or_create_reward(user_id, company_id)
        reward.total_points += points
        await self.db.commit()
        return reward

    async def update_streak(self, user_id: int, company_id: int, today: date) -> Optional[AttendanceReward]:
        """
        Advance or reset the streak from today's log.

        An attended day extends the streak when the previous attendance was
        exactly one day earlier and restarts it at 1 after a longer gap.
        A repeat run on the same day keeps the value and fires the streak
        triggers again, unless the day was first processed as absent, in which
        case the streak restarts at 1. An absent day resets it to 0. Days with
        no log are ignored.
        """
        result = await self.db.execute(
            select(AttendanceLog).where(
                AttendanceLog.user_id == user_id,
                AttendanceLog.company_id == company_id,
                AttendanceLog.date == today
            )
        )
        today_log = result.scalar_one_or_none()
        if not today_log:
            return None

        reward = await self.get_or_create_reward(user_id, company_id)

        if is_attended(today_log.status):
            new_streak = reward.current_streak
            if reward.last_attendance_date:
                gap = day_gap(reward.last_attendance_date, today)
                if gap == 1:
                    new_streak = reward.current_streak + 1
                elif gap > 1 or reward.current_streak == 0:
                    new_streak = 1
            else:
                new_streak = 1

            reward.current_streak = new_streak
            reward.longest_streak = max(new_streak, reward.longest_streak)
            reward.last_attendance_date = today

            if new_streak == STREAK_BONUS_AT:
                reward.total_points += STREAK_BONUS_POINTS
            await self.db.commit()

            badge_name = STREAK_BADGES.get(new_streak)
            if badge_name:
                await self.assign_badge(user_id, company_id, badge_name, today)

        elif today_log.status == AttendanceStatus.ABSENT:
            reward.current_streak = 0
            reward.last_attendance_date = today
            await self.db.commit()

        return reward

    async def assign_badge(self, user_id: int, company_id: int, badge_name: str, awarded_on: date) -> bool:
        """Award a catalog badge; False when unknown or already awarded that day"""
        badge = await self.db.scalar(select(Badge).where(Badge.name == badge_name))
        if not badge:
            logger.warning(f"Badge '{badge_name}' not found in catalog, skipping award for user {user_id}")
            return False

        existing = await self.db.scalar(
            select(UserBadge.id).where(
                UserBadge.user_id == user_id,
                UserBadge.company_id == company_id,
                UserBadge.badge_id == badge.id,
                UserBadge.awarded_on == awarded_on
            )
        )
        if existing:
            return False

        self.db.add(UserBadge(
            user_id=user_id,
            company_id=company_id,
            badge_id=badge.id,
            awarded_on=awarded_on,
        ))
        await self.db.commit()

        logger.info(f"Badge '{badge_name}' awarded to user {user_id}")
        return True

    async def get_badges_earned(self, user_id: int, company_id: int) -> List[str]:
        result = await self.db.execute(
            select(Badge.name)
            .join(UserBadge, UserBadge.badge_id == Badge.id)
            .where(UserBadge.user_id == user_id, UserBadge.company_id == company_id)
            .group_by(Badge.name)
            .order_by(func.min(UserBadge.awarded_on), Badge.name)
        )
        return list(result.scalars().all())

    async def get_badges(self) -> List[Badge]:
        result = await self.db.execute(select(Badge).order_by(Badge.id))
        return list(result.scalars().all())

    async def get_reward_summary(self, user_id: int, company_id: int) -> Dict[str, Any]:
        reward = await self.get_or_create_reward(user_id, company_id)
        return {
            "user_id": reward.user_id,
            "company_id": reward.company_id,
            "total_points": reward.total_points,
            "current_streak": reward.current_streak,
            "longest_streak": reward.longest_streak,
            "last_attendance_date": reward.last_attendance_date,
            "monthly_score": reward.monthly_score,
            "perfect_months": reward.perfect_months,
            "badges_earned": await self.get_badges_earned(user_id, company_id),
        }

    async def get_top_performers(self, company_id: int, limit: int = 5) -> List[Dict[str, Any]]:
        result = await self.db.execute(
            select(AttendanceReward, User)
            .join(User, User.id == AttendanceReward.user_id)
            .where(
                AttendanceReward.company_id == company_id,
                User.is_deleted == False
            )
            .order_by(AttendanceReward.total_points.desc(), AttendanceReward.current_streak.desc())
            .limit(limit)
        )

        performers = []
        for reward, user in result.all():
            performers.append({
                "user_id": user.id,
                "display_name": user.display_name,
                "photo_url": user.photo_url,
                "total_points": reward.total_points,
                "current_streak": reward.current_streak,
                "longest_streak": reward.longest_streak,
                "badges_earned": await self.get_badges_earned(user.id, company_id),
            })
        return performers

    async def initialize_badges(self) -> int:
        """Seed the badge catalog when it is empty; returns badges created"""
        existing = await self.db.scalar(select(func.count(Badge.id)))
        if existing:
            logger.info("[Init] Badges already initialized")
            return 0

        for badge_data in BADGE_DEFINITIONS:
            self.db.add(Badge(**badge_data))
        await self.db.commit()

        logger.info("[Init] Badges initialized successfully")
        return len(BADGE_DEFINITIONS)
