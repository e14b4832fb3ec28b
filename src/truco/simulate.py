import argparse
import csv
import logging
from pathlib import Path

from truco.escalator import PaulistaEscalator
from truco.match import TrucoMatch
from truco.player import Player
from truco.profile_store import ProfileStore
from truco_agents.advisor_agent import AdvisorAgent
from truco_agents.always_truco_agent import AlwaysTrucoAgent
from truco_agents.basic_agent import BasicAgent
from truco_agents.input_agent import InputAgent

RESULT_FIELDS = ["match_id", "game_seed", "agent_name", "won", "score", "opponent_score", "hands_won", "hand_count"]

OPPONENTS = {
    'basic': BasicAgent,
    'always-truco': AlwaysTrucoAgent,
    'advisor': AdvisorAgent,
}


def run_matches(match_count: int, opponent: str = 'basic', game_seed: int = None, target_score: int = 12) -> list[dict]:
    """
        Play the advisor against one kind of opponent, match after match.

        Args:
            match_count (int): How many matches to play.
            opponent (str): Key in OPPONENTS.
            game_seed (int): Seed of the first match, following ones add the match id. None for random.
            target_score (int): Points needed to win a match.

        Returns:
            list[dict]: One row per player per match.
    """
    if opponent not in OPPONENTS:
        raise ValueError(f"Undefined opponent '{opponent}'")

    # One store for the whole session: the advisor keeps learning across matches
    store = ProfileStore()
    results = []

    for match_id in range(match_count):
        advisor = Player(0, AdvisorAgent(store=store), "Advisor")
        rival = Player(1, OPPONENTS[opponent](name=f"Rival {opponent}"), "Rival")

        seed = None if game_seed is None else game_seed + match_id
        match = TrucoMatch(match_id, [advisor, rival], PaulistaEscalator(), target_score, seed)
        match.run_game()
        print(f"Match {match_id} (seed {match.game_seed}): {advisor.score} x {rival.score}")
        results.extend(match.get_results())

    return results


def write_results(results: list[dict], path: Path):
    # Create directory if it doesn't exist
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=RESULT_FIELDS)
        writer.writeheader()
        writer.writerows(results)


def play_console(game_seed: int = None):
    human = Player(0, InputAgent(), "You")
    advisor = Player(1, AdvisorAgent(), "Advisor")
    match = TrucoMatch(0, [human, advisor], PaulistaEscalator(), game_seed=game_seed)
    match.run_game()
    print(f"Final score: You {human.score} x {advisor.score} Advisor")


def main():
    parser = argparse.ArgumentParser(description="Play the Truco advisor against baseline agents")
    parser.add_argument("--matches", type=int, default=100)
    parser.add_argument("--opponent", choices=sorted(OPPONENTS), default='basic')
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--output", type=Path, default=Path("data/results.csv"))
    parser.add_argument("--play", action="store_true", help="Play against the advisor at the console")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.play:
        play_console(args.seed)
        return

    results = run_matches(args.matches, args.opponent, args.seed)
    write_results(results, args.output)
    print(f"Wrote {len(results)} rows to {args.output}")


if __name__ == '__main__':
    main()
