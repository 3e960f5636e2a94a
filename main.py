#!/usr/bin/env python3
"""
Cleansweeper - Main entry point.

Usage:
    python main.py play [--height H] [--width W] [--fraction F] [--easy] [--torus]
    python main.py evaluate [--agent {random,logic}] [--games N]
    python main.py compare [--games N]
"""
import argparse
import logging
from typing import Dict, Optional

from cleansweeper.game import BoardConfig, BoardGenerationError
from cleansweeper.agents import BaseAgent, RandomAgent, LogicAgent
from cleansweeper.evaluation import Evaluator


def make_config(args: argparse.Namespace) -> BoardConfig:
    """Build the board configuration from parsed flags."""
    return BoardConfig(
        height=args.height,
        width=args.width,
        fraction=args.fraction,
        easy=args.easy,
        torus=args.torus,
    )


def make_agent(
    name: str, config: BoardConfig, seed: Optional[int] = None
) -> BaseAgent:
    """Create an agent by name for the given board."""
    if name == "random":
        return RandomAgent(config.height, config.width, config.torus, seed=seed)
    if name == "logic":
        return LogicAgent(
            config.height, config.width, config.torus, mine_fraction=config.fraction
        )
    raise ValueError(f"Unknown agent: {name}")


def play(args: argparse.Namespace, config: BoardConfig) -> None:
    """Open the game window."""
    # pygame is only needed for the window
    from cleansweeper.ui import CleansweeperApp

    CleansweeperApp(config, seed=args.seed).run()


def evaluate(args: argparse.Namespace, config: BoardConfig) -> None:
    """Evaluate a specific agent."""
    agent = make_agent(args.agent, config, seed=args.seed)
    evaluator = Evaluator(config, num_episodes=args.games, seed=args.seed)

    print(f"\nEvaluating {args.agent} agent over {args.games} games...")
    results = evaluator.evaluate(agent)

    print(f"Results for {args.agent}:")
    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg reward: {results['avg_reward']:.2f}")
    print(f"  Avg steps: {results['avg_steps']:.1f}")
    print(f"  Avg opened: {results['avg_opened']:.1f} cells")


def compare(args: argparse.Namespace, config: BoardConfig) -> None:
    """Compare all agents."""
    agents: Dict[str, BaseAgent] = {
        "Random": make_agent("random", config, seed=args.seed),
        "Logic": make_agent("logic", config),
    }

    evaluator = Evaluator(config, num_episodes=args.games, seed=args.seed)
    results = evaluator.compare(agents)

    print("\n" + "=" * 50)
    print("Agent Comparison Results")
    print("=" * 50)
    print(f"{'Agent':<20} {'Win Rate':<12} {'Avg Reward':<12} {'Avg Steps':<10}")
    print("-" * 50)

    for name, metrics in results.items():
        print(
            f"{name:<20} {metrics['win_rate']:>10.1%} "
            f"{metrics['avg_reward']:>10.2f} "
            f"{metrics['avg_steps']:>10.1f}"
        )


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with every subcommand."""
    parser = argparse.ArgumentParser(
        description="Cleansweeper - Minesweeper where flags are moves"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )

    # Board flags shared by every command
    board_parser = argparse.ArgumentParser(add_help=False)
    board_parser.add_argument(
        "--height", type=int, default=16, help="Height of the grid"
    )
    board_parser.add_argument(
        "--width", type=int, default=16, help="Width of the grid"
    )
    board_parser.add_argument(
        "--fraction", type=float, default=0.25,
        help="Fraction of cells which contain mines",
    )
    board_parser.add_argument(
        "--easy", action="store_true", help="Allow moves to be undone"
    )
    board_parser.add_argument(
        "--torus", action="store_true", help="Wrap the board edges around"
    )
    board_parser.add_argument(
        "--seed", type=int, default=None, help="Seed for mine placement"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser(
        "play", parents=[board_parser], help="Play in a window"
    )

    eval_parser = subparsers.add_parser(
        "evaluate", parents=[board_parser], help="Evaluate an agent"
    )
    eval_parser.add_argument(
        "--agent",
        choices=["random", "logic"],
        default="logic",
        help="Agent to evaluate",
    )
    eval_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )

    compare_parser = subparsers.add_parser(
        "compare", parents=[board_parser], help="Compare all agents"
    )
    compare_parser.add_argument(
        "--games", type=int, default=100, help="Number of games per agent"
    )

    return parser


COMMANDS = {
    "play": play,
    "evaluate": evaluate,
    "compare": compare,
}


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    command = COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        return

    try:
        config = make_config(args)
    except ValueError as error:
        parser.error(str(error))

    try:
        command(args, config)
    except (BoardGenerationError, ValueError) as error:
        parser.error(str(error))


if __name__ == "__main__":
    main()
