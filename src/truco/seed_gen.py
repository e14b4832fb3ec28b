import random
import hmac
import hashlib
import struct


def generate_game_seed(seed: int = None) -> int:
    """
        Select a 32-bit match seed, or generate one.

        Args:
            seed (int): The selected seed. Default to None for a generated seed.

        Returns:
            int: A 32-bit integer seed.
    """
    if seed is not None:
        return abs(seed) & 0xFFFFFFFF
    return random.randint(0, 0xFFFFFFFF)


def derive_seed(game_seed: int, namespace: int) -> int:
    """
        Derive a deterministic 32-bit seed for one random stream of a match.

        Args:
            game_seed (int): The master seed of the match.
            namespace (int): Tells the deck, dealer order and agent streams apart.

        Returns:
            int: A 32-bit integer seed for a Random object.
    """
    if not (0 <= game_seed <= 0xFFFFFFFF):
        raise ValueError("Game seed must be a 32-bit integer")

    key_bytes = struct.pack('>I', game_seed)
    data_bytes = struct.pack('>Q', namespace)
    digest = hmac.new(key_bytes, data_bytes, hashlib.sha256).digest()

    return struct.unpack('>I', digest[:4])[0]


def derive_deck_seed(game_seed: int) -> int:
    return derive_seed(game_seed, 0)


def derive_order_seed(game_seed: int) -> int:
    return derive_seed(game_seed, 1)


def derive_agent_seeds(game_seed: int, agent_count: int = 2) -> list[int]:
    return [derive_seed(game_seed, agent_id + 1000) for agent_id in range(agent_count)]
