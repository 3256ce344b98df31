"""Population percentiles and leaderboards."""

import logging
import uuid

import pytest

from strength_analytics.core.enums import Gender, StrengthLevel
from strength_analytics.services.percentiles import percentile_rank, value_at_percentile, weight_bucket
from tests.fakes import day, make_session


def _lifter(workouts, exercise_id, one_rm_weight, user_id=None):
    """Seed a user whose best estimated 1RM is exactly one_rm_weight (single rep x weight/(1+1/30))."""
    user_id = user_id or uuid.uuid4()
    workouts.add(make_session(user_id, exercise_id, day(1), [(one_rm_weight * 30 / 31, 1)]))
    return user_id


class TestPercentileRank:
    def test_share_at_or_below(self):
        assert percentile_rank(100, [80, 90, 100, 110]) == 75

    def test_single_member_is_top(self):
        assert percentile_rank(50, [50]) == 100

    def test_empty_population_is_top(self):
        assert percentile_rank(50, []) == 100

    def test_bounds(self):
        assert percentile_rank(10, [80, 90, 100]) == 0
        assert percentile_rank(500, [80, 90, 100]) == 100

    def test_weight_bucket(self):
        assert weight_bucket(82.4) == (80.0, 85.0)
        assert weight_bucket(85.0) == (85.0, 90.0)
        assert weight_bucket(None) is None
        assert weight_bucket(0) is None

    def test_value_at_percentile(self):
        population = [110, 80, 100, 90]
        assert value_at_percentile(population, 75) == 100
        assert value_at_percentile(population, 100) == 110
        assert value_at_percentile(population, 0) == 80
        assert value_at_percentile([], 50) is None


class TestExercisePercentile:
    @pytest.mark.asyncio
    async def test_overall_gender_and_bucket(self, ranker, workouts, profiles, exercises):
        bench = exercises.add("Bench Press", "bench-press")
        me = _lifter(workouts, bench.id, 100)
        profiles.set(me, Gender.MALE, 82)
        for weight, gender, bw in [(80, Gender.MALE, 81), (90, Gender.FEMALE, 60), (110, Gender.MALE, 95)]:
            profiles.set(_lifter(workouts, bench.id, weight), gender, bw)

        result = await ranker.get_exercise_percentile(me, bench.id)
        assert result.percentile == 75
        assert result.total_users == 4
        assert result.user_max_1rm == 100.0
        assert result.gender == Gender.MALE
        assert result.gender_total_users == 3
        assert result.gender_percentile == 67
        assert (result.weight_bucket_start, result.weight_bucket_end) == (80.0, 85.0)
        assert result.gender_weight_total_users == 2
        assert result.gender_weight_percentile == 100

    @pytest.mark.asyncio
    async def test_missing_metrics_leave_breakdown_empty(self, ranker, workouts, exercises):
        bench = exercises.add("Bench Press", "bench-press")
        me = _lifter(workouts, bench.id, 100)
        _lifter(workouts, bench.id, 120)
        result = await ranker.get_exercise_percentile(me, bench.id)
        assert result.percentile == 50
        assert result.gender is None
        assert result.gender_percentile is None
        assert result.gender_weight_percentile is None

    @pytest.mark.asyncio
    async def test_population_is_values_only(self, ranker, workouts, exercises):
        bench = exercises.add("Bench Press", "bench-press")
        for w in (80, 90):
            _lifter(workouts, bench.id, w)
        values = await ranker.get_all_users_max_1rm(bench.id)
        assert sorted(values) == [pytest.approx(80), pytest.approx(90)]

    @pytest.mark.asyncio
    async def test_weight_for_percentile(self, ranker, workouts, profiles, exercises):
        bench = exercises.add("Bench Press", "bench-press")
        for w, g in [(80, Gender.MALE), (90, Gender.FEMALE), (100, Gender.MALE), (110, Gender.MALE)]:
            profiles.set(_lifter(workouts, bench.id, w), g, 80)
        assert await ranker.get_weight_for_percentile(bench.id, 75) == 100.0
        assert await ranker.get_weight_for_percentile(bench.id, 50, gender=Gender.MALE) == 100.0
        assert await ranker.get_weight_for_percentile(bench.id, 50, body_weight_kg=120) is None


class TestUserLeaderboard:
    @pytest.mark.asyncio
    async def test_key_lifts_only_sorted_by_percentile(self, ranker, workouts, exercises):
        bench = exercises.add("Bench Press", "bench-press")
        squat = exercises.add("Back Squat")  # resolved by alias
        curl = exercises.add("Bicep Curl")
        me = uuid.uuid4()
        _lifter(workouts, bench.id, 60, me)
        _lifter(workouts, squat.id, 200, me)
        _lifter(workouts, curl.id, 40, me)
        for w in (80, 100, 120):
            _lifter(workouts, bench.id, w)
        _lifter(workouts, squat.id, 150)

        rankings = await ranker.get_user_leaderboard_rankings(me)
        assert [r.exercise_name for r in rankings] == ["Back Squat", "Bench Press"]
        assert rankings[0].percentile == 100
        assert rankings[1].percentile == 25
        assert rankings[1].total_users == 4

    @pytest.mark.asyncio
    async def test_no_history(self, ranker):
        assert await ranker.get_user_leaderboard_rankings(uuid.uuid4()) == []

    @pytest.mark.asyncio
    async def test_agrees_with_exercise_percentile_on_unrounded_1rm(self, ranker, workouts, exercises):
        bench = exercises.add("Bench Press", "bench-press")
        me, other = uuid.uuid4(), uuid.uuid4()
        workouts.add(
            make_session(me, bench.id, day(1), [(100, 5)]),  # 116.666...
            make_session(other, bench.id, day(1), [(120, 3)]),
        )
        rankings = await ranker.get_user_leaderboard_rankings(me)
        single = await ranker.get_exercise_percentile(me, bench.id)
        assert rankings[0].percentile == single.percentile == 50
        assert rankings[0].user_max_1rm == 116.7

    def _three_key_lifts(self, workouts, exercises):
        me = uuid.uuid4()
        lifts = {}
        for name, key, mine, theirs in [
            ("Bench Press", "bench-press", 60, 80),
            ("Squat", "squat", 200, 150),
            ("Deadlift", "deadlift", 180, 200),
        ]:
            info = exercises.add(name, key)
            _lifter(workouts, info.id, mine, me)
            _lifter(workouts, info.id, theirs)
            lifts[key] = info.id
        return me, lifts

    @pytest.mark.asyncio
    async def test_failing_and_slow_population_fetches_are_omitted(self, ranker, workouts, exercises, caplog):
        me, lifts = self._three_key_lifts(workouts, exercises)
        workouts.population_fail_for.add(lifts["squat"])
        workouts.population_delay_for[lifts["deadlift"]] = 2.0  # fixture timeout is 0.5s

        with caplog.at_level(logging.WARNING):
            rankings = await ranker.get_user_leaderboard_rankings(me)
        assert [r.exercise_name for r in rankings] == ["Bench Press"]
        assert rankings[0].percentile == 50
        assert "Key lift population fetch failed" in caplog.text

    @pytest.mark.asyncio
    async def test_lift_with_empty_population_is_dropped(self, ranker, workouts, exercises):
        me, lifts = self._three_key_lifts(workouts, exercises)
        workouts.population_missing.add(lifts["squat"])

        rankings = await ranker.get_user_leaderboard_rankings(me)
        assert sorted(r.exercise_name for r in rankings) == ["Bench Press", "Deadlift"]
        assert all(r.total_users == 2 for r in rankings)


class TestFriendsLeaderboard:
    @pytest.mark.asyncio
    async def test_ranked_with_current_user_and_levels(self, ranker, workouts, profiles, social, exercises):
        bench = exercises.add("Bench Press", "bench-press")
        me = _lifter(workouts, bench.id, 100)
        alice = _lifter(workouts, bench.id, 120)
        bob = _lifter(workouts, bench.id, 90)
        idle = uuid.uuid4()
        profiles.set(me, Gender.MALE, 80, name="Me")
        profiles.set(alice, Gender.FEMALE, 60, name="Alice")
        profiles.set(bob, name=None)
        social.follow(me, alice, bob, idle)

        board = await ranker.get_friends_leaderboard(me, bench.id)
        assert [e.rank for e in board] == [1, 2, 3]
        assert [e.user_id for e in board] == [alice, me, bob]
        assert board[1].display_name == "You"
        assert board[1].is_current_user
        assert board[0].display_name == "Alice"
        assert board[2].display_name == "User"
        assert board[0].strength_level == StrengthLevel.WORLD_CLASS
        assert board[1].strength_level == StrengthLevel.INTERMEDIATE
        assert board[2].strength_level is None

    @pytest.mark.asyncio
    async def test_current_user_without_history_still_listed(self, ranker, workouts, social, exercises):
        bench = exercises.add("Bench Press", "bench-press")
        me = uuid.uuid4()
        friend = _lifter(workouts, bench.id, 100)
        social.follow(me, friend)
        board = await ranker.get_friends_leaderboard(me, bench.id)
        assert [e.user_id for e in board] == [friend, me]
        assert board[1].max_1rm == 0.0

    @pytest.mark.asyncio
    async def test_failing_friend_is_omitted(self, ranker, workouts, social, exercises, caplog):
        bench = exercises.add("Bench Press", "bench-press")
        me = _lifter(workouts, bench.id, 100)
        ok = _lifter(workouts, bench.id, 110)
        broken = _lifter(workouts, bench.id, 150)
        workouts.fail_for.add(broken)
        social.follow(me, ok, broken)

        with caplog.at_level(logging.WARNING):
            board = await ranker.get_friends_leaderboard(me, bench.id)
        assert [e.user_id for e in board] == [ok, me]
        assert "Friend stats fetch failed" in caplog.text

    @pytest.mark.asyncio
    async def test_slow_friend_times_out(self, ranker, workouts, social, exercises):
        bench = exercises.add("Bench Press", "bench-press")
        me = _lifter(workouts, bench.id, 100)
        fast = _lifter(workouts, bench.id, 110)
        slow = _lifter(workouts, bench.id, 150)
        workouts.delay_for[slow] = 2.0  # fixture timeout is 0.5s
        social.follow(me, fast, slow)

        board = await ranker.get_friends_leaderboard(me, bench.id)
        assert [e.user_id for e in board] == [fast, me]
