"""Type hints used in Team Roping Draw."""

from typing import Optional, Tuple, Union

# Role strings as stored in snapshots
HEAD = "Cabeça"
HEEL = "Pé"
BOTH = "Ambas"

# Serialized run time: null, seconds, or the "SAT" marker
RunTimeJSON = Optional[Union[float, int, str]]

# Raw input accepted at the entry layer
RawTimeInput = Optional[Union[float, int, str]]

# (head competitor id, heel competitor id)
PairKey = Tuple[str, str]

#  LocalWords:  PairKey SAT
