from klondike import Klondike
from stock_knowledge import StockKnowledge
from strategy import play, strategy_init
import argparse
import logging
import time
import multiprocessing as mp
from concurrent.futures import ProcessPoolExecutor
import os
from typing import List, Tuple, Optional


def print_state(game: Klondike, steps: int) -> None:
    render = game.render()
    print(f"\n=== Game state at step {steps} ===")
    print(f"Foundations filled: {sum(len(f) for f in game.foundations)}/52")
    print(f"Stock: {render.stock_size} cards remaining, waste: {render.waste}")
    print("Foundations:", [f"F{i}: {card}" for i, card in enumerate(render.foundations)])
    print("Tableaus:")
    for i, tableau in enumerate(render.tableaus):
        visible_cards = [card for card in tableau if card is not None]
        hidden_count = len(tableau) - len(visible_cards)
        print(f"  T{i}: {hidden_count} hidden, {visible_cards}")
    print("=" * 40)


def play_game(
    max_steps: int = 1000, seed: Optional[int] = None, verbose: bool = False, print_interval: int = 0
) -> Tuple[bool, int]:
    """
    Play a single game of Klondike solitaire with the stock-peeking strategy.

    Args:
        max_steps: Maximum number of strategy steps before giving up
        seed: Seed for the deal (None = random deal)
        verbose: Whether to print game progress
        print_interval: Number of steps after which to print game state (0 = never print)

    Returns:
        Tuple of (win status, number of steps taken)
    """
    game = Klondike()
    game.reset(seed)
    knowledge = StockKnowledge()
    game = strategy_init(game, knowledge)

    def on_step(state: Klondike, steps: int) -> None:
        if print_interval > 0 and steps % print_interval == 0:
            print_state(state, steps)

    game, steps = play(game, knowledge, max_steps=max_steps, on_step=on_step)

    won = game.is_done()
    if verbose:
        print(f"Game {'won' if won else 'lost'} in {steps} steps")
    return won, steps


def play_game_worker(args: Tuple[int, int, Optional[int]]) -> Tuple[bool, int]:
    """
    Worker function for parallel execution of games.

    Args:
        args: Tuple containing (game_id, max_steps, base_seed)

    Returns:
        Tuple of (win status, number of steps taken)
    """
    game_id, max_steps, base_seed = args
    seed = None if base_seed is None else base_seed + game_id
    return play_game(max_steps=max_steps, seed=seed)


def play_multiple_games(
    num_games: int = 100, max_steps: int = 1000, seed: Optional[int] = None, num_processes: Optional[int] = None
) -> Tuple[int, int]:
    """
    Play multiple games in parallel and report statistics.

    Args:
        num_games: Number of games to play
        max_steps: Maximum steps per game
        seed: Seed of the first deal, game i uses seed + i (None = random deals)
        num_processes: Number of processes to use (None = auto)

    Returns:
        Tuple of (games won, games played)
    """
    if num_processes is None or num_processes <= 0:
        num_cpus = os.cpu_count() or 4
        num_processes = min(num_cpus, num_games)
    else:
        num_processes = min(num_processes, num_games)

    print(f"Playing {num_games} games using {num_processes} processes...")

    start_time = time.time()

    game_args = [(i, max_steps, seed) for i in range(num_games)]
    results: List[Tuple[bool, int]] = []
    completed = 0

    with ProcessPoolExecutor(max_workers=num_processes) as executor:
        for result in executor.map(play_game_worker, game_args):
            results.append(result)

            completed += 1
            if completed % max(1, num_games // 20) == 0 or completed == num_games:
                print(f"Completed {completed}/{num_games} games...", end="\r")

    wins = sum(1 for win, _ in results if win)
    total_steps = sum(steps for _, steps in results)

    duration = time.time() - start_time
    win_rate = (wins / num_games) * 100
    avg_steps = total_steps / num_games

    print(f"\nResults from {num_games} games:")
    print(f"Win rate: {win_rate:.2f}% ({wins}/{num_games})")
    print(f"Average steps per game: {avg_steps:.2f}")
    print(f"Time taken: {duration:.2f} seconds ({duration/num_games:.2f} seconds per game)")
    return wins, num_games


def main() -> None:
    """Main entry point for the CLI application."""
    # Handle process start method for multiprocessing on macOS
    if hasattr(mp, 'set_start_method'):
        try:
            mp.set_start_method('spawn')
        except RuntimeError:
            # Method already set
            pass

    parser = argparse.ArgumentParser(description='Play Klondike Solitaire with a stock-peeking planner')
    parser.add_argument('--games', type=int, default=1,
                        help='Number of games to play (default: 1)')
    parser.add_argument('--max-steps', type=int, default=1000,
                        help='Maximum strategy steps per game (default: 1000)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed of the (first) deal (default: random)')
    parser.add_argument('--verbose', action='store_true',
                        help='Print detailed game progress and planner logs')
    parser.add_argument('--print-interval', type=int, default=0,
                        help='Print game state every N steps (default: 0 = never)')
    parser.add_argument('--processes', type=int, default=0,
                        help='Number of processes to use (default: 0 = auto)')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.games == 1:
        win, steps = play_game(
            max_steps=args.max_steps, seed=args.seed, verbose=args.verbose, print_interval=args.print_interval
        )
        print(f"Game {'won' if win else 'lost'} after {steps} steps")
    else:
        play_multiple_games(
            num_games=args.games,
            max_steps=args.max_steps,
            seed=args.seed,
            num_processes=args.processes
        )


if __name__ == "__main__":
    main()
