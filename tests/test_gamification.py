import pytest

from schoolroute_safety.gamification import Badge, GamificationLedger, Mission


@pytest.fixture
def ledger():
    badges = [
        Badge(id=1, name="First steps", threshold=10),
        Badge(id=2, name="Route expert", threshold=250),
        Badge(id=3, name="Reporter"),
    ]
    missions = [
        Mission(id=1, title="Report three hazards", target_value=3,
                reward_points=50, reward_badge_id=3, period="weekly"),
        Mission(id=2, title="Finish a quiz"),
    ]
    return GamificationLedger(badges, missions, points_per_level=100)


class TestPoints:

    def test_new_user_starts_at_level_one(self, ledger):
        user = ledger.get_user("alice")
        assert user.points == 0
        assert user.level == 1

    @pytest.mark.parametrize("points, level", [(0, 1), (99, 1), (100, 2), (250, 3)])
    def test_level_for(self, ledger, points, level):
        assert ledger.level_for(points) == level

    def test_add_points_updates_level(self, ledger):
        user = ledger.add_points("alice", 120)
        assert user.points == 120
        assert user.level == 2

    def test_points_never_negative(self, ledger):
        ledger.add_points("alice", 30)
        user = ledger.add_points("alice", -100)
        assert user.points == 0
        assert user.level == 1

    def test_points_per_level_must_be_positive(self):
        with pytest.raises(ValueError):
            GamificationLedger(points_per_level=0)


class TestBadges:

    def test_threshold_badges_awarded_once(self, ledger):
        ledger.add_points("alice", 260)
        awarded = ledger.check_badges("alice")
        assert [b.id for b in awarded] == [1, 2]
        assert ledger.check_badges("alice") == []
        assert ledger.owned_badges("alice") == {1, 2}

    def test_reward_only_badge_not_awarded_by_points(self, ledger):
        ledger.add_points("alice", 10_000)
        assert 3 not in {b.id for b in ledger.check_badges("alice")}


class TestMissions:

    def test_progress_and_reward_paid_once(self, ledger):
        state = ledger.update_mission_progress("alice", 1)
        assert (state.progress, state.completed) == (1, False)
        assert ledger.get_user("alice").points == 0

        ledger.update_mission_progress("alice", 1, step=5)
        assert state.progress == 3
        assert state.completed
        assert ledger.get_user("alice").points == 50
        assert 3 in ledger.owned_badges("alice")

        ledger.update_mission_progress("alice", 1)
        assert state.progress == 3
        assert ledger.get_user("alice").points == 50

    def test_mission_without_rewards(self, ledger):
        state = ledger.update_mission_progress("bob", 2)
        assert state.completed
        assert ledger.get_user("bob").points == 0

    def test_progress_is_per_user(self, ledger):
        ledger.update_mission_progress("alice", 1)
        state = ledger.update_mission_progress("bob", 1)
        assert state.progress == 1

    def test_unknown_mission(self, ledger):
        with pytest.raises(KeyError):
            ledger.update_mission_progress("alice", 99)


class TestLeaderboard:

    def test_ranking(self, ledger):
        ledger.add_points("alice", 50)
        ledger.add_points("bob", 200)
        ledger.add_points("carol", 50)
        ledger.set_display_name("bob", "Bob")

        board = ledger.leaderboard()
        assert [(e.rank, e.user_id) for e in board] == [
            (1, "bob"), (2, "alice"), (3, "carol"),
        ]
        assert board[0].display_name == "Bob"
        assert board[0].level == 3

    def test_limit(self, ledger):
        for i in range(5):
            ledger.add_points(f"user-{i}", i)
        assert [e.user_id for e in ledger.leaderboard(limit=2)] == ["user-4", "user-3"]

    def test_rank_of(self, ledger):
        ledger.add_points("alice", 5)
        ledger.add_points("bob", 10)
        assert ledger.rank_of("alice") == 2
        assert ledger.rank_of("nobody") is None


class TestPersistence:

    def test_save_and_load(self, ledger, tmp_path):
        ledger.add_points("alice", 120)
        ledger.set_display_name("alice", "Alice")
        ledger.check_badges("alice")
        ledger.update_mission_progress("alice", 1)
        path = tmp_path / "state" / "ledger.json"
        ledger.save(str(path))

        restored = GamificationLedger(ledger.badges.values(), ledger.missions.values())
        restored.load(str(path))

        user = restored.get_user("alice")
        assert (user.points, user.level, user.display_name) == (120, 2, "Alice")
        assert restored.owned_badges("alice") == {1}
        assert restored.update_mission_progress("alice", 1).progress == 2

    def test_levels_recomputed_on_load(self, ledger, tmp_path):
        ledger.add_points("alice", 120)
        path = tmp_path / "ledger.json"
        ledger.save(str(path))

        restored = GamificationLedger(points_per_level=50)
        restored.load(str(path))
        assert restored.get_user("alice").level == 3

    def test_load_rejects_other_files(self, tmp_path):
        path = tmp_path / "ledger.json"
        path.write_text('[1, 2]', encoding="utf-8")
        with pytest.raises(ValueError):
            GamificationLedger().load(str(path))

        path.write_text('{"users": [{"name": "alice"}]}', encoding="utf-8")
        with pytest.raises(ValueError):
            GamificationLedger().load(str(path))
