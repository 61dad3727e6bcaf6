'''Ballots and ballot validation.

A ballot in a ranked-choice election ranks every candidate. It is represented
by a sequence of ranks indexed by the candidate's position on the roster,
so that for three candidates, ``(2, 3, 1)`` means the voter prefers the third
candidate most, then the first, and the second least. A valid ballot for
`n` candidates therefore contains each of the numbers 1 to `n` exactly once.

Validators raise :class:`InvalidBallot` (a subclass of :class:`VoteError`)
for rankings that break this rule.
'''

from __future__ import annotations

import abc
import collections.abc
from numbers import Integral
from typing import Any, List, Optional, Sequence, Tuple

from rcvlib.candidate import Candidate


RanksType = Tuple[int, ...]


class VoteError(Exception, metaclass=abc.ABCMeta):
    '''A vote is invalid given the election rules.'''
    pass


class InvalidBallot(VoteError):
    '''A ballot is not a permutation of ranks 1 to n.

    :param ranks: The rejected ranking.
    :param n_candidates: Number of candidates the ballot must rank.
    :param reason: Which rule the ranking breaks.
    '''
    def __init__(self,
                 ranks: Any,
                 n_candidates: Optional[int] = None,
                 reason: str = '',
                 ):
        self.ranks = ranks
        self.n_candidates = n_candidates
        self.reason = reason
        message = f'invalid ballot: {ranks!r}'
        if reason:
            message += f' ({reason})'
        if n_candidates is not None:
            message += f', must be a permutation of 1 to {n_candidates}'
        super().__init__(message)


def _is_rank_value(value: Any) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


class RankPermutationValidator:
    '''Validate that a ranking orders all candidates without ties or gaps.

    :param n_candidates: Number of candidates on the roster; every ballot
        must assign each of the ranks 1 to n_candidates to exactly one of
        them.
    '''
    def __init__(self, n_candidates: int):
        self.n_candidates = n_candidates

    def validate(self, ranks: Sequence[int]) -> None:
        '''Check if the ranking is a valid complete ballot.

        :param ranks: Ranks of the candidates, in roster order.
        :raises InvalidBallot: If the ranking is not a sequence of integers,
            is of a different length than the roster, contains a rank
            outside 1 to n_candidates or repeats a rank.
        '''
        n = self.n_candidates
        if (not isinstance(ranks, collections.abc.Sequence)
                or isinstance(ranks, (str, bytes))):
            raise InvalidBallot(ranks, n, 'not a sequence of ranks')
        if len(ranks) != n:
            raise InvalidBallot(ranks, n, f'{len(ranks)} ranks given')
        for rank in ranks:
            if not _is_rank_value(rank):
                raise InvalidBallot(ranks, n, f'non-integer rank {rank!r}')
            if not 1 <= rank <= n:
                raise InvalidBallot(ranks, n, f'rank {rank} out of range')
        if len(set(ranks)) < n:
            raise InvalidBallot(ranks, n, 'duplicated ranks')

    def is_valid(self, ranks: Sequence[int]) -> bool:
        '''Return True if the ranking is a valid complete ballot.'''
        try:
            self.validate(ranks)
        except InvalidBallot:
            return False
        return True


class Ballot:
    '''A validated complete ranking of the candidates.

    :param ranks: Ranks of the candidates in roster order, 1 being the most
        preferred. Must already be validated; the ballot does not check it.
    '''
    __slots__ = ('_ranks', )

    def __init__(self, ranks: Sequence[int]):
        self._ranks = tuple(int(rank) for rank in ranks)

    @property
    def ranks(self) -> RanksType:
        return self._ranks

    def top_candidate(self, candidates: Sequence[Candidate]) -> Optional[int]:
        '''Return the roster index of the best-ranked remaining candidate.

        :param candidates: The election roster, in the order the ranks refer
            to.
        :returns: Index of the candidate with the lowest rank number among
            those not eliminated, or None if all of them have been (the
            ballot is exhausted).
        '''
        best_i = None
        for cand_i, rank in enumerate(self._ranks):
            if candidates[cand_i].eliminated:
                continue
            if best_i is None or rank < self._ranks[best_i]:
                best_i = cand_i
        return best_i

    def preference_order(self) -> List[int]:
        '''Return roster indices from the most to the least preferred.'''
        return sorted(range(len(self._ranks)), key=self._ranks.__getitem__)

    def __repr__(self) -> str:
        return f'<Ballot{self._ranks}>'
