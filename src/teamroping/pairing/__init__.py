"""Pair generation and draw ordering."""

# Team Roping Draw
# Copyright (C) 2025  Team Roping Draw developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from teamroping.pairing.generator import (
    eligible_pairings,
    generate_pairs,
    head_pool,
    heel_pool,
)
from teamroping.pairing.sequencer import count_back_to_back, sequence_pairs

__all__ = [
    "eligible_pairings",
    "generate_pairs",
    "head_pool",
    "heel_pool",
    "sequence_pairs",
    "count_back_to_back",
]
