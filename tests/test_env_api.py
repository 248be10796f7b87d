"""
Tests for Gymnasium environment API.
"""

import os

import numpy as np
import pytest
import yaml

from endless_runner.runner_core.config_loader import load_config
from endless_runner.runner_core.env_gym import RunnerEnv

DEFAULT_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    "endless_runner",
    "game_config.yaml"
)


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def env():
    env = RunnerEnv()
    yield env
    env.close()


class TestRunnerEnv:
    """Test single environment API."""

    def test_reset_returns_obs_and_info(self, env):
        result = env.reset(seed=42)

        assert isinstance(result, tuple)
        assert len(result) == 2

        obs, info = result
        assert isinstance(obs, dict)
        assert info["score"] == 0
        assert info["delta_score"] == 0

    def test_observation_in_space(self, env):
        obs, _ = env.reset(seed=42)
        assert env.observation_space.contains(obs)

        for _ in range(30):
            obs, _, terminated, _, _ = env.step(1)
            assert env.observation_space.contains(obs)
            if terminated:
                break

    def test_observation_shapes(self, env, config):
        obs, _ = env.reset(seed=42)

        assert obs["obstacle_x"].shape == (config.observation.max_obstacles,)
        assert obs["obstacle_mask"].shape == (config.observation.max_obstacles,)
        assert obs["powerup_kind"].shape == (config.observation.max_powerups,)
        assert not obs["obstacle_mask"].any()
        assert (obs["powerup_kind"] == -1).all()

    def test_step_returns_five_values(self, env):
        env.reset(seed=42)

        result = env.step(0)

        assert isinstance(result, tuple)
        assert len(result) == 5

        obs, reward, terminated, truncated, info = result
        assert isinstance(obs, dict)
        assert isinstance(reward, float)
        assert isinstance(terminated, bool)
        assert isinstance(truncated, bool)
        assert info["delta_score"] == 1

    def test_reward_is_always_zero(self, env):
        env.reset(seed=42)
        rng = np.random.default_rng(0)

        for _ in range(200):
            _, reward, terminated, truncated, _ = env.step(int(rng.integers(2)))
            assert reward == 0.0
            if terminated or truncated:
                env.reset()

    def test_jump_action_leaves_ground(self, env):
        env.reset(seed=42)
        obs, _, _, _, _ = env.step(1)

        assert obs["grounded"] == 0
        assert obs["player_vy"] < 0

    def test_idle_agent_terminates(self, env):
        env.reset(seed=42)

        for _ in range(2000):
            _, _, terminated, truncated, info = env.step(0)
            assert not truncated
            if terminated:
                break
        else:
            pytest.fail("idle run never ended")

        assert info["game_over"]

    def test_reset_after_termination(self, env):
        env.reset(seed=1)
        for _ in range(2000):
            _, _, terminated, _, _ = env.step(0)
            if terminated:
                break

        obs, info = env.reset(seed=1)
        assert info["score"] == 0
        assert not info["game_over"]
        assert int(obs["score"]) == 0

    def test_truncation_at_frame_cap(self, tmp_path):
        with open(DEFAULT_PATH, "r") as f:
            raw = yaml.safe_load(f)
        raw["caps"]["max_frames"] = 5
        path = tmp_path / "game_config.yaml"
        path.write_text(yaml.safe_dump(raw))

        env = RunnerEnv(config_path=str(path))
        env.reset(seed=0)

        flags = [env.step(0)[3] for _ in range(5)]
        assert flags == [False, False, False, False, True]
        env.close()

    def test_observation_keys_match_space(self, env):
        obs, _ = env.reset(seed=42)
        assert set(obs) == set(env.observation_space.spaces)

    def test_render_fps_follows_config(self, tmp_path):
        with open(DEFAULT_PATH, "r") as f:
            raw = yaml.safe_load(f)
        raw["render"]["fps"] = 30
        path = tmp_path / "game_config.yaml"
        path.write_text(yaml.safe_dump(raw))

        env = RunnerEnv(config_path=str(path))
        assert env.metadata["render_fps"] == 30
        assert RunnerEnv.metadata["render_fps"] == 60
        env.close()

    def test_deterministic_with_seed(self):
        env1 = RunnerEnv()
        env2 = RunnerEnv()
        env1.reset(seed=123)
        env2.reset(seed=123)

        for step in range(600):
            action = 1 if step % 40 == 0 else 0
            obs1, _, t1, _, _ = env1.step(action)
            obs2, _, t2, _, _ = env2.step(action)

            assert t1 == t2
            for key in obs1:
                np.testing.assert_array_equal(obs1[key], obs2[key])
            if t1:
                break

        env1.close()
        env2.close()


class TestRendering:
    """Headless rendering through the env."""

    def test_rgb_array_shape(self, monkeypatch):
        pytest.importorskip("pygame")
        monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")

        env = RunnerEnv(render_mode="rgb_array", image_width=200, image_height=100)
        env.reset(seed=0)
        for _ in range(300):
            _, _, terminated, _, _ = env.step(0)
            if terminated:
                break

        frame = env.render()
        env.close()

        assert frame.shape == (100, 200, 3)
        assert frame.dtype == np.uint8

    def test_no_render_mode_returns_none(self, env):
        env.reset(seed=0)
        assert env.render() is None
