"""
Distance between two collections of answer sets.
"""

from typing import Sequence

import numpy as np
from scipy.optimize import linear_sum_assignment

from aspupdate.symbolic import AnswerSet


def answer_set_distance(before: Sequence[AnswerSet], after: Sequence[AnswerSet]) -> int:
    """
    Minimum total cost of pairing the answer sets of ``before`` with those of ``after``.

    The cost of a pair is the size of the symmetric difference. The shorter
    collection is padded with empty answer sets, so an unmatched answer set
    costs its own size. The optimal pairing is found with the Hungarian
    method.

    Example:
        >>> a = AnswerSet.of([Literal.of("p")])
        >>> answer_set_distance([a], [])
        1
    """
    size = max(len(before), len(after))
    if size == 0:
        return 0

    padded_before = list(before) + [AnswerSet()] * (size - len(before))
    padded_after = list(after) + [AnswerSet()] * (size - len(after))

    costs = np.zeros((size, size), dtype=np.int64)
    for i, left in enumerate(padded_before):
        for j, right in enumerate(padded_after):
            costs[i, j] = left.distance(right)

    rows, columns = linear_sum_assignment(costs)
    return int(costs[rows, columns].sum())
