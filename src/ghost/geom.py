from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Sequence

from .math import lerp, lerp_angle


@dataclass(slots=True, frozen=True)
class Vec3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> Vec3:
        return self * scalar

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __len__(self) -> int:
        return 3

    def lerp(self, other: Vec3, t: float) -> Vec3:
        """Linear blend; `t` outside [0, 1] extrapolates."""
        return Vec3(
            lerp(self.x, other.x, t),
            lerp(self.y, other.y, t),
            lerp(self.z, other.z, t),
        )

    def lerp_angles(self, other: Vec3, t: float) -> Vec3:
        """Per-axis blend of Euler angles in degrees along the shortest arc."""
        return Vec3(
            lerp_angle(self.x, other.x, t),
            lerp_angle(self.y, other.y, t),
            lerp_angle(self.z, other.z, t),
        )

    @classmethod
    def from_seq(cls, values: Sequence[float]) -> Vec3:
        if len(values) < 3:
            raise ValueError(f"expected 3 components, got {len(values)}")
        return cls(float(values[0]), float(values[1]), float(values[2]))

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)
