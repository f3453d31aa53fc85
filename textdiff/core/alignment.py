"""
Longest common subsequence alignment.

The LCS of the two normalized token sequences is the backbone the
classifier walks to decide which tokens are unchanged.

Mathematical Background:
The classic dynamic-programming recurrence over prefixes A[:i], B[:j]:
    dp[i][j] = dp[i-1][j-1] + 1                  if A[i-1] == B[j-1]
    dp[i][j] = max(dp[i-1][j], dp[i][j-1])       otherwise

Each row only depends on the previous row and on itself to the left,
so a row can be computed with numpy as a running maximum:
    c[j]      = max(dp[i-1][j], dp[i-1][j-1] + eq[j])
    dp[i][:]  = maximum.accumulate(c)
which gives the same table as the scalar loop.

Backtracking:
From dp[m][n], equal tokens are emitted diagonally. Otherwise the
original-side pointer moves only when dp[i-1][j] is strictly greater;
on ties the modified-side pointer moves. This tie-break decides which
tokens end up classified as added vs removed, so it must not change.

Cost is O(m*n) time and space. Callers bound input size through the
streaming coordinator's chunking.
"""

from typing import Dict, Hashable, List, Sequence, Tuple
import numpy as np
from numpy.typing import NDArray


def _encode(a: Sequence[Hashable], b: Sequence[Hashable]) -> Tuple[NDArray[np.int64], NDArray[np.int64]]:
    """Map tokens of both sequences to shared integer ids."""
    ids: Dict[Hashable, int] = {}
    a_ids = np.fromiter((ids.setdefault(t, len(ids)) for t in a), dtype=np.int64, count=len(a))
    b_ids = np.fromiter((ids.setdefault(t, len(ids)) for t in b), dtype=np.int64, count=len(b))
    return a_ids, b_ids


def lcs_table(a: Sequence[Hashable], b: Sequence[Hashable]) -> NDArray[np.int32]:
    """
    Build the (m+1) x (n+1) LCS length table.

    Args:
        a: First token sequence (original side)
        b: Second token sequence (modified side)

    Returns:
        numpy int32 array where table[i, j] is the LCS length of a[:i], b[:j]
    """
    m, n = len(a), len(b)
    table = np.zeros((m + 1, n + 1), dtype=np.int32)
    if m == 0 or n == 0:
        return table

    a_ids, b_ids = _encode(a, b)

    for i in range(1, m + 1):
        prev = table[i - 1]
        eq = (b_ids == a_ids[i - 1]).astype(np.int32)
        candidates = np.empty(n + 1, dtype=np.int32)
        candidates[0] = 0
        candidates[1:] = np.maximum(prev[1:], prev[:-1] + eq)
        table[i] = np.maximum.accumulate(candidates)

    return table


def longest_common_subsequence(a: Sequence[Hashable], b: Sequence[Hashable]) -> List[Hashable]:
    """
    Compute the longest common subsequence of two token sequences.

    Args:
        a: Original-side tokens (already normalized)
        b: Modified-side tokens (already normalized)

    Returns:
        LCS elements in order; length never exceeds min(len(a), len(b))

    Example:
        >>> longest_common_subsequence(["a", "b", "c"], ["a", "c"])
        ['a', 'c']
    """
    table = lcs_table(a, b)

    result: List[Hashable] = []
    i, j = len(a), len(b)
    while i > 0 and j > 0:
        if a[i - 1] == b[j - 1]:
            result.append(a[i - 1])
            i -= 1
            j -= 1
        elif table[i - 1, j] > table[i, j - 1]:
            i -= 1
        else:
            j -= 1

    result.reverse()
    return result


def lcs_length(a: Sequence[Hashable], b: Sequence[Hashable]) -> int:
    """Length of the longest common subsequence of a and b."""
    return int(lcs_table(a, b)[len(a), len(b)])
