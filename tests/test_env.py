import gymnasium as gym
import numpy as np

import falling_blocks.env  # noqa: F401
from falling_blocks.env.falling_blocks_env import EnvAction, FallingBlocksEnv


def test_reset_returns_observation_in_space():
    env = FallingBlocksEnv()
    obs, info = env.reset(seed=0)
    assert obs.shape == (20, 10)
    assert obs.dtype == np.int8
    assert env.observation_space.contains(obs)
    assert info["position"] == (3, 0)
    assert info["merged_cells"] == 0


def test_reset_with_same_seed_is_reproducible():
    env = FallingBlocksEnv()
    _, first = env.reset(seed=42)
    _, second = env.reset(seed=42)
    assert first["piece"] == second["piece"]


def test_step_applies_command_then_tick():
    env = FallingBlocksEnv()
    env.reset(seed=1)
    obs, reward, terminated, truncated, info = env.step(EnvAction.LEFT)
    assert info["position"] == (2, 1)
    assert reward == env.step_reward
    assert not terminated and not truncated

    _, _, _, _, info = env.step(EnvAction.NONE)
    assert info["position"] == (2, 2)


def test_episode_terminates_with_penalty():
    env = FallingBlocksEnv()
    env.reset(seed=3)
    terminated = False
    reward = 0.0
    for _ in range(2000):
        _, reward, terminated, truncated, _ = env.step(EnvAction.SOFT_DROP)
        if terminated:
            break
    assert terminated
    assert reward == env.terminal_penalty


def test_episode_truncates_after_max_steps():
    env = FallingBlocksEnv(max_episode_steps=3)
    env.reset(seed=0)
    results = [env.step(EnvAction.NONE) for _ in range(3)]
    assert [r[3] for r in results] == [False, False, True]


def test_registered_env_runs_through_gym_make():
    env = gym.make("FallingBlocks-20x10-v0")
    obs, _ = env.reset(seed=5)
    obs, _, _, _, _ = env.step(env.action_space.sample())
    assert obs.shape == (20, 10)
    env.close()


def test_rgb_render_scales_cells():
    env = FallingBlocksEnv(render_mode="rgb_array")
    env.reset(seed=0)
    frame = env.render()
    assert frame.shape == (240, 120, 3)
    assert frame.dtype == np.uint8
