import argparse
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd

SAVE_PATH = Path("data")


def load_data(path):
    return pd.read_csv(path)


def add_margin(df):
    df["margin"] = df["score"] - df["opponent_score"]
    return df


def summarize(df):
    """Win rate, average margin and match length per agent."""
    summary = df.groupby("agent_name").agg(
        matches=("match_id", "count"),
        win_rate=("won", "mean"),
        avg_margin=("margin", "mean"),
        avg_hands=("hand_count", "mean"),
    )
    return summary.sort_values("win_rate", ascending=False)


def plot_win_counts(df, save_path: Path = SAVE_PATH):
    win_counts = df[df["won"] == 1].groupby("agent_name").size()

    plt.figure()
    win_counts.sort_values(ascending=False).plot(kind="bar")
    plt.title("Number of Wins by Agent")
    plt.ylabel("Wins")
    plt.xlabel("Agent")
    plt.xticks(rotation=0)
    plt.savefig(save_path / "win_counts.png")
    plt.close()


def plot_margin_distribution(df, save_path: Path = SAVE_PATH):
    for agent in df["agent_name"].unique():
        agent_df = df[df["agent_name"] == agent]

        plt.figure()
        plt.hist(agent_df["margin"], bins=range(-15, 16))
        plt.xlim(-15, 15)
        plt.title(f"Point Margin Distribution - {agent}")
        plt.xlabel("Own score - opponent score")
        plt.ylabel("Frequency")
        plt.savefig(save_path / f"margin_{agent}.png")
        plt.close()


def plot_hand_count_distribution(df, save_path: Path = SAVE_PATH):
    # Both rows of a match share the hand count
    match_df = df.drop_duplicates("match_id")

    plt.figure()
    plt.hist(match_df["hand_count"], bins=20)
    plt.title("Hands per Match")
    plt.xlabel("Hand Count")
    plt.ylabel("Frequency")
    plt.savefig(save_path / "hand_count.png")
    plt.close()


def main():
    parser = argparse.ArgumentParser(description="Plot results written by truco.simulate")
    parser.add_argument("--input", type=Path, default=SAVE_PATH / "results.csv")
    parser.add_argument("--output-dir", type=Path, default=SAVE_PATH)
    args = parser.parse_args()

    args.output_dir.mkdir(parents=True, exist_ok=True)
    df = add_margin(load_data(args.input))
    print(summarize(df))

    plot_win_counts(df, args.output_dir)
    plot_margin_distribution(df, args.output_dir)
    plot_hand_count_distribution(df, args.output_dir)


if __name__ == "__main__":
    main()
