from abc import ABC, abstractmethod


class BaseEscalator(ABC):
    """
    Abstract base class for stake ladders.
    Every truco call moves a hand one step up the ladder.
    """

    @abstractmethod
    def get_stakes(self, truco_calls: int) -> int:
        """
        Points the current hand is worth.

        Args:
            truco_calls (int): Accepted escalations so far this hand (starts at 0).

        Returns:
            int: Points awarded to the hand winner.
        """
        pass

    @abstractmethod
    def can_raise(self, truco_calls: int) -> bool:
        pass


class PaulistaEscalator(BaseEscalator):
    def __init__(self):
        # Plain hand, truco, seis, nove, doze
        self.LEVELS = [1, 3, 6, 9, 12]

    def get_stakes(self, truco_calls: int) -> int:
        if truco_calls < 0: truco_calls = 0

        # Cap at max level
        level_index = min(truco_calls, len(self.LEVELS) - 1)
        return self.LEVELS[level_index]

    def can_raise(self, truco_calls: int) -> bool:
        return truco_calls < len(self.LEVELS) - 1
