"""
Building - Defines floor structure and call button layout

Floors are integer indices starting from 0 (ground). The building decides
which hall call directions exist at each floor: the ground floor only has
an UP button, the top floor only a DOWN button, every other floor both.
"""

from typing import List, Dict


class Building:
    """
    Represents a building with num_floors floors numbered 0..num_floors-1.
    """

    def __init__(self, num_floors: int):
        """
        Args:
            num_floors: Number of floors (at least 1)
        """
        if num_floors < 1:
            raise ValueError("Building must have at least one floor")

        self.num_floors = num_floors
        self.all_floors = list(range(num_floors))
        self.min_floor = 0
        self.max_floor = num_floors - 1

        self._directions: Dict[int, List[str]] = {
            floor: self._directions_for(floor) for floor in self.all_floors
        }

    def _directions_for(self, floor: int) -> List[str]:
        directions = []
        if floor < self.max_floor:
            directions.append("UP")
        if floor > self.min_floor:
            directions.append("DOWN")
        return directions

    def available_directions(self, floor: int) -> List[str]:
        """
        Get available call buttons at a floor.

        Args:
            floor: Floor index

        Returns:
            ['UP'] on the ground floor, ['DOWN'] on the top floor,
            ['UP', 'DOWN'] elsewhere, [] in a single-floor building

        Raises:
            ValueError: If floor is not valid
        """
        if not self.is_valid_floor(floor):
            raise ValueError(f"Invalid floor: {floor}")
        return list(self._directions[floor])

    def is_valid_floor(self, floor: int) -> bool:
        return floor in self._directions

    def is_legal_call(self, floor: int, direction: str) -> bool:
        """Check whether a call button (floor, direction) exists."""
        return self.is_valid_floor(floor) and direction in self._directions[floor]

    def get_display_name(self, floor: int) -> str:
        """Human-readable floor label: 'G' for ground, else the index."""
        if not self.is_valid_floor(floor):
            raise ValueError(f"Invalid floor: {floor}")
        return "G" if floor == 0 else str(floor)

    def __repr__(self) -> str:
        return f"Building(floors={self.num_floors}, range={self.min_floor}-{self.max_floor})"
