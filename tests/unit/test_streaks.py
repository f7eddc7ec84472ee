from datetime import date, timedelta

import pytest
from sqlalchemy import func, select

from worklogix.models import AttendanceReward, Badge, UserBadge
from worklogix.models.shared.enums import AttendanceStatus
from worklogix.services.attendance.reward_service import RewardService

TODAY = date(2026, 3, 10)


async def _seed_reward(db, user, current_streak, last_attendance_date, total_points=0):
    reward = await RewardService(db).get_or_create_reward(user.id, user.company_id)
    reward.current_streak = current_streak
    reward.longest_streak = max(current_streak, reward.longest_streak)
    reward.last_attendance_date = last_attendance_date
    reward.total_points = total_points
    await db.commit()
    return reward


@pytest.mark.usefixtures("badges")
class TestUpdateStreak:
    """Streak state machine driven by the day's log"""

    async def test_first_attendance_starts_streak(self, db, member, make_log):
        await make_log(member, TODAY, AttendanceStatus.ON_TIME)

        reward = await RewardService(db).update_streak(member.id, member.company_id, TODAY)

        assert reward.current_streak == 1
        assert reward.longest_streak == 1
        assert reward.last_attendance_date == TODAY

    async def test_consecutive_day_increments_by_one(self, db, member, make_log):
        await _seed_reward(db, member, 3, TODAY - timedelta(days=1))
        await make_log(member, TODAY, AttendanceStatus.PRESENT)

        reward = await RewardService(db).update_streak(member.id, member.company_id, TODAY)

        assert reward.current_streak == 4
        assert reward.longest_streak == 4

    async def test_gap_resets_to_one(self, db, member, make_log):
        await _seed_reward(db, member, 7, TODAY - timedelta(days=3))
        await make_log(member, TODAY, AttendanceStatus.LATE)

        reward = await RewardService(db).update_streak(member.id, member.company_id, TODAY)

        assert reward.current_streak == 1
        assert reward.longest_streak == 7

    async def test_absence_resets_to_zero(self, db, member, make_log):
        await _seed_reward(db, member, 6, TODAY - timedelta(days=1))
        await make_log(member, TODAY, AttendanceStatus.ABSENT)

        reward = await RewardService(db).update_streak(member.id, member.company_id, TODAY)

        assert reward.current_streak == 0
        assert reward.longest_streak == 6
        assert reward.last_attendance_date == TODAY

    async def test_no_log_is_a_no_op(self, db, member):
        service = RewardService(db)

        assert await service.update_streak(member.id, member.company_id, TODAY) is None
        assert await service.get_reward(member.id, member.company_id) is None

    async def test_same_day_rerun_fires_bonus_again(self, db, member, make_log):
        await _seed_reward(db, member, 4, TODAY - timedelta(days=1))
        await make_log(member, TODAY, AttendanceStatus.ON_TIME)
        service = RewardService(db)

        await service.update_streak(member.id, member.company_id, TODAY)
        reward = await service.update_streak(member.id, member.company_id, TODAY)

        assert reward.current_streak == 5
        assert reward.total_points == 20

    async def test_same_day_rerun_reassigns_badge_once_per_day(self, db, member, make_log):
        await _seed_reward(db, member, 9, TODAY - timedelta(days=1))
        await make_log(member, TODAY, AttendanceStatus.ON_TIME)
        service = RewardService(db)

        await service.update_streak(member.id, member.company_id, TODAY)
        reward = await service.update_streak(member.id, member.company_id, TODAY)

        awards = await db.scalar(select(func.count(UserBadge.id)).where(UserBadge.user_id == member.id))
        assert reward.current_streak == 10
        assert awards == 1

    async def test_attendance_after_same_day_absence_restarts_streak(self, db, member, make_log):
        await _seed_reward(db, member, 6, TODAY - timedelta(days=1))
        log = await make_log(member, TODAY, AttendanceStatus.ABSENT)
        service = RewardService(db)
        await service.update_streak(member.id, member.company_id, TODAY)

        log.status = AttendanceStatus.SLIGHTLY_LATE
        await db.commit()
        reward = await service.update_streak(member.id, member.company_id, TODAY)

        assert reward.current_streak == 1
        assert reward.longest_streak == 6
        assert reward.last_attendance_date == TODAY

    async def test_fifth_day_bonus(self, db, member, make_log):
        await _seed_reward(db, member, 4, TODAY - timedelta(days=1), total_points=40)
        await make_log(member, TODAY, AttendanceStatus.ON_TIME)

        reward = await RewardService(db).update_streak(member.id, member.company_id, TODAY)

        assert reward.current_streak == 5
        assert reward.total_points == 50

    @pytest.mark.parametrize("streak_before, badge_name", [
        (9, "Early Bird"),
        (29, "Perfect Month"),
        (89, "Dedicated Star"),
    ])
    async def test_streak_badges(self, db, member, make_log, streak_before, badge_name):
        await _seed_reward(db, member, streak_before, TODAY - timedelta(days=1))
        await make_log(member, TODAY, AttendanceStatus.ON_TIME)
        service = RewardService(db)

        await service.update_streak(member.id, member.company_id, TODAY)

        assert await service.get_badges_earned(member.id, member.company_id) == [badge_name]

    async def test_early_bird_re_awarded_after_reset(self, db, member, make_log):
        service = RewardService(db)
        first_day = TODAY
        second_day = TODAY + timedelta(days=20)

        await _seed_reward(db, member, 9, first_day - timedelta(days=1))
        await make_log(member, first_day, AttendanceStatus.ON_TIME)
        await service.update_streak(member.id, member.company_id, first_day)

        await _seed_reward(db, member, 9, second_day - timedelta(days=1))
        await make_log(member, second_day, AttendanceStatus.ON_TIME)
        await service.update_streak(member.id, member.company_id, second_day)

        awards = await db.scalar(
            select(func.count(UserBadge.id))
            .join(Badge, Badge.id == UserBadge.badge_id)
            .where(UserBadge.user_id == member.id, Badge.name == "Early Bird")
        )
        assert awards == 2
        assert await service.get_badges_earned(member.id, member.company_id) == ["Early Bird"]


@pytest.mark.usefixtures("badges")
class TestBadges:
    async def test_assign_badge_once_per_day(self, db, member):
        service = RewardService(db)

        assert await service.assign_badge(member.id, member.company_id, "Work Warrior", TODAY) is True
        assert await service.assign_badge(member.id, member.company_id, "Work Warrior", TODAY) is False
        assert await service.assign_badge(member.id, member.company_id, "Work Warrior", TODAY + timedelta(days=1)) is True

    async def test_unknown_badge_is_ignored(self, db, member):
        service = RewardService(db)

        assert await service.assign_badge(member.id, member.company_id, "Night Owl", TODAY) is False
        assert await service.get_badges_earned(member.id, member.company_id) == []

    async def test_initialize_badges_only_once(self, db):
        service = RewardService(db)

        assert await service.initialize_badges() == 0
        names = [badge.name for badge in await service.get_badges()]
        assert names == [
            "Early Bird",
            "Perfect Month",
            "Reliable Performer",
            "Work Warrior",
            "Dedicated Star",
            "Consistent Star",
        ]


class TestTopPerformers:
    async def test_ordered_by_points(self, db, company, make_user):
        service = RewardService(db)
        low = await make_user(company, display_name="Low")
        high = await make_user(company, display_name="High")
        await service.add_points(low.id, company.id, 20)
        await service.add_points(high.id, company.id, 90)

        performers = await service.get_top_performers(company.id, limit=5)

        assert [p["display_name"] for p in performers] == ["High", "Low"]
        assert performers[0]["total_points"] == 90

    async def test_scoped_to_company(self, db, company, make_company, make_user):
        service = RewardService(db)
        other_company = await make_company(name="Other Co")
        outsider = await make_user(other_company)
        await service.add_points(outsider.id, other_company.id, 500)

        assert await service.get_top_performers(company.id) == []

    async def test_reward_row_is_unique_per_user_and_company(self, db, member):
        service = RewardService(db)
        await service.get_or_create_reward(member.id, member.company_id)
        await service.get_or_create_reward(member.id, member.company_id)

        count = await db.scalar(select(func.count(AttendanceReward.id)))
        assert count == 1
