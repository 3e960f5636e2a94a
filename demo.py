#!/usr/bin/env python3
"""Watch the Logic agent play Cleansweeper in the terminal."""
import time
import os

from cleansweeper.game import BoardConfig, CleansweeperEnv
from cleansweeper.agents import LogicAgent


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def demo(delay: float = 0.3, games: int = 5, size: int = 12,
         fraction: float = 0.2, torus: bool = False):
    """Run demo games with visualization."""
    if games < 1:
        raise ValueError("Number of games must be at least 1")
    config = BoardConfig(height=size, width=size, fraction=fraction, torus=torus)
    env = CleansweeperEnv(config=config, render_mode="ansi")
    agent = LogicAgent(size, size, torus=torus, mine_fraction=fraction)

    print(f"Board: {size}x{size}, {100 * fraction:.0f}% mines"
          f"{' (torus)' if torus else ''}")
    print("Starting in 2 seconds...")
    time.sleep(2)

    wins = 0

    for game in range(games):
        obs, info = env.reset()
        agent.reset()

        clear_screen()
        print(f"=== Game {game + 1}/{games} ===")
        print(f"Wins so far: {wins}\n")
        print(env.render())
        time.sleep(delay)

        done = not env.board.is_playing
        step = 0

        while not done:
            action = agent.select_action(obs, env.get_action_mask())
            flag, row, col = env.action_to_move(action)

            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Game {game + 1}/{games} | Step {step} ===")
            print(f"Wins so far: {wins}")
            print(f"Last move: {'flag' if flag else 'open'} ({row}, {col})\n")
            print(env.render())
            time.sleep(delay)

        if info.get("game_state") == "WON":
            wins += 1
            print(f"\n*** WIN! ***")
        else:
            print(f"\n*** LOST ***")

        time.sleep(1.0)  # Pause between games

    print(f"\n=== Final: {wins}/{games} wins ({100*wins/games:.0f}%) ===")


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between moves")
    parser.add_argument("--games", type=int, default=5, help="Number of games")
    parser.add_argument("--size", type=int, default=12, help="Board size (NxN)")
    parser.add_argument("--fraction", type=float, default=0.2, help="Fraction of cells holding mines")
    parser.add_argument("--torus", action="store_true", help="Wrap the board edges around")
    args = parser.parse_args()
    if args.games < 1:
        parser.error("Number of games must be at least 1")

    demo(delay=args.delay, games=args.games, size=args.size,
         fraction=args.fraction, torus=args.torus)
