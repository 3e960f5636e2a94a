"""
Evaluation module for Cleansweeper agents.

Plays agents through many games and reports standardized metrics.
"""
import logging
from typing import Optional, Dict

from ..game.environment import CleansweeperEnv
from ..game.board import BoardConfig
from ..agents.base_agent import BaseAgent

logger = logging.getLogger(__name__)


# ============================================================================
# Evaluator
# ============================================================================

class Evaluator:
    """
    Evaluate and compare multiple agents.

    Every agent is scored on the same configuration; pass a seed to have
    them face the same sequence of boards.
    """

    def __init__(
        self,
        board_config: Optional[BoardConfig] = None,
        num_episodes: int = 100,
        max_steps: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            board_config: Board configuration for evaluation.
            num_episodes: Number of evaluation episodes.
            max_steps: Maximum steps per episode (default: two per cell).
            seed: Seed for the sequence of boards.

        Raises:
            ValueError: If fewer than one episode is requested.
        """
        if num_episodes < 1:
            raise ValueError("Number of games must be at least 1")
        self.board_config = board_config or BoardConfig()
        self.num_episodes = num_episodes
        self.max_steps = max_steps or 2 * self.board_config.num_cells
        self.seed = seed

    def evaluate(self, agent: BaseAgent) -> Dict[str, float]:
        """
        Evaluate a single agent.

        Args:
            agent: Agent to evaluate.

        Returns:
            Dictionary with evaluation metrics.
        """
        env = CleansweeperEnv(config=self.board_config, seed=self.seed)

        wins = 0
        total_reward = 0.0
        total_steps = 0
        total_opened = 0

        for episode in range(self.num_episodes):
            seed = None if self.seed is None else self.seed + episode
            observation, info = env.reset(seed=seed)
            agent.reset()
            episode_reward = 0.0

            # A board can be won on the deal
            if env.board.is_won:
                wins += 1
                total_opened += info["opened"]
                continue

            for _ in range(self.max_steps):
                valid_actions = env.get_action_mask()
                action = agent.select_action(observation, valid_actions)

                observation, reward, terminated, truncated, info = env.step(action)

                episode_reward += reward
                total_steps += 1

                if terminated or truncated:
                    break

            if info.get("game_state") == "WON":
                wins += 1
            total_opened += info.get("opened", 0)
            total_reward += episode_reward

        logger.debug(
            "%s won %d of %d games", type(agent).__name__, wins, self.num_episodes
        )

        return {
            "win_rate": wins / self.num_episodes,
            "avg_reward": total_reward / self.num_episodes,
            "avg_steps": total_steps / self.num_episodes,
            "avg_opened": total_opened / self.num_episodes,
        }

    def compare(
        self, agents: Dict[str, BaseAgent]
    ) -> Dict[str, Dict[str, float]]:
        """
        Compare multiple agents.

        Args:
            agents: Dictionary of agent_name -> agent.

        Returns:
            Dictionary of agent_name -> evaluation metrics.
        """
        results = {}
        for name, agent in agents.items():
            logger.info("Evaluating %s...", name)
            results[name] = self.evaluate(agent)
        return results
