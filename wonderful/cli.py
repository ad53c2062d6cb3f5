"""
Wonderful CLI - Command-line interface for the engine.

Usage:
    wonderful simulate [--players N] [--seed S] [--bots B]   Play a full game with bots
    wonderful serve [--host H] [--port P]                   Run the REST API
"""

import argparse
import logging
import random
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Wonderful - Card-Drafting Game Engine",
        prog="wonderful",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Play a full game with bots")
    simulate_parser.add_argument("--players", type=int, default=3, help="Number of bot players")
    simulate_parser.add_argument("--seed", type=int, help="Seed for deck and bots")
    simulate_parser.add_argument(
        "--bots", choices=["random", "builder"], default="random", help="Bot policy for every seat"
    )
    simulate_parser.add_argument("--log", action="store_true", help="Print every state change")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "simulate":
        return cmd_simulate(args)
    elif args.command == "serve":
        return cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_simulate(args):
    """Play a full game with bots and print the result."""
    from .bots import BuilderPolicy, RandomPolicy
    from .engine_core import RulesError, calculate_final_scores, score_breakdown
    from .engine_core.setup import create_game, initialize_game
    from .session import GameLoop, LoopState

    names = [f"Bot {i + 1}" for i in range(args.players)]
    try:
        game = create_game(names)
    except RulesError as e:
        print(f"Error: {e.message}")
        sys.exit(1)

    initialize_game(game, rng=random.Random(args.seed))
    if args.bots == "builder":
        policies = {pid: BuilderPolicy() for pid in game.player_ids}
    else:
        policies = {
            pid: RandomPolicy(seed=None if args.seed is None else args.seed + seat)
            for seat, pid in enumerate(game.player_ids)
        }

    result = GameLoop(game, policies).run()

    if args.log:
        for change in result.log:
            print(change)
        print()

    if result.loop_state is not LoopState.GAME_OVER:
        print(f"Game did not finish: {result.loop_state.value} after {result.actions_applied} actions")
        sys.exit(1)

    final = result.state
    scores = calculate_final_scores(final)

    print(f"Game over after {result.actions_applied} actions")
    for player in final.players:
        breakdown = score_breakdown(player)
        print(
            f"  {player.name}: {scores[player.player_id]} VP "
            f"(cards {breakdown.gross}, combos {breakdown.combo}, "
            f"generals {breakdown.generals}, financiers {breakdown.financiers}; "
            f"empire {player.empire.count})"
        )

    winner = final.get_player(final.winner_id) if final.winner_id else None
    print(f"Winner: {winner.name if winner else 'none (tie)'}")
    return 0


def cmd_serve(args):
    """Run the REST API with uvicorn."""
    import uvicorn

    uvicorn.run("wonderful.api.app:app", host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    main()
