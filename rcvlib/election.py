'''Single-seat ranked-choice (instant-runoff) election.

The :class:`Election` object keeps the candidate roster and the submitted
ballots and evaluates the result by the following process:

1.  The first-choice votes are tallied. If any candidate holds more than half
    of them, that candidate wins.
2.  Otherwise, the candidate(s) with the fewest votes are eliminated, all at
    once if there are several. Their ballots are transferred to the
    best-ranked candidate still in the contest.
3.  Steps 1 and 2 repeat until a candidate wins or all remaining candidates
    have exactly the same number of votes, in which case they are tied.
'''

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from rcvlib.candidate import Candidate
from rcvlib.vote import Ballot, RankPermutationValidator

logger = logging.getLogger(__name__)


class ElectionError(Exception):
    '''The election was set up or driven in an unsupported order.

    E.g. more candidates registered than declared, or ballots submitted
    before the roster was complete.
    '''
    pass


class Election:
    '''A single-seat election evaluated by instant-runoff voting.

    Register all the candidates first (their order defines which position
    of the ballot ranks refers to whom), then submit ballots and finally call
    :meth:`resolve`.

    :param n_candidates: Number of candidates standing in the election.
    :param transfer: How to treat ballots of eliminated candidates:

        -   `'next_preference'` (default) transfers each ballot to the
            best-ranked candidate on it that is still in the contest,
        -   `'exhaust'` removes the ballots from the count.
    '''

    TRANSFER_METHODS: List[str] = ['next_preference', 'exhaust']

    def __init__(self,
                 n_candidates: int,
                 transfer: str = 'next_preference',
                 ):
        if (not isinstance(n_candidates, int)
                or isinstance(n_candidates, bool)
                or n_candidates < 1):
            raise ValueError(
                f'invalid number of candidates: {n_candidates!r},'
                ' must be a positive integer'
            )
        if transfer not in self.TRANSFER_METHODS:
            raise ValueError(
                f'invalid ballot transfer method: {transfer},'
                f' allowed {self.TRANSFER_METHODS}'
            )
        self.n_candidates = n_candidates
        self.transfer = transfer
        self.candidates: List[Candidate] = []
        self.validator = RankPermutationValidator(n_candidates)
        self.n_ballots = 0
        self.rounds = 0

    @property
    def is_complete(self) -> bool:
        '''Whether all the declared candidates have been registered.'''
        return len(self.candidates) == self.n_candidates

    def register(self, name: str) -> Candidate:
        '''Add a candidate to the next free position on the roster.

        :param name: Name of the candidate.
        :returns: The created candidate.
        :raises ElectionError: If the roster is already full or ballots have
            already been submitted.
        '''
        if self.is_complete:
            raise ElectionError(
                f'cannot register {name}: all {self.n_candidates}'
                ' candidates already registered'
            )
        if self.n_ballots:
            raise ElectionError(
                f'cannot register {name} after ballots were submitted'
            )
        candidate = Candidate(name)
        self.candidates.append(candidate)
        return candidate

    def submit(self, ranks: Sequence[int]) -> None:
        '''Add a complete ballot to the election.

        :param ranks: Ranks of the candidates in roster order; must be
            a permutation of the numbers 1 to n_candidates.
        :raises InvalidBallot: If the ranks are not a valid permutation.
            Nothing is added in that case.
        :raises ElectionError: If not all candidates have been registered.
        '''
        if not self.is_complete:
            raise ElectionError(
                f'only {len(self.candidates)} of {self.n_candidates}'
                ' candidates registered, cannot accept ballots'
            )
        self.validator.validate(ranks)
        self._assign(Ballot(ranks))
        self.n_ballots += 1

    def submit_many(self, rank_lists: Iterable[Sequence[int]]) -> None:
        '''Submit ballots one by one; stops at the first invalid one.'''
        for ranks in rank_lists:
            self.submit(ranks)

    def remaining(self) -> List[Candidate]:
        '''Return candidates not yet eliminated, in roster order.'''
        return [cand for cand in self.candidates if not cand.eliminated]

    def tally(self) -> Dict[str, int]:
        '''Return current vote counts of the remaining candidates.'''
        return {cand.name: cand.votes for cand in self.remaining()}

    def total_votes(self) -> int:
        return sum(cand.votes for cand in self.remaining())

    def resolve(self) -> List[str]:
        '''Run the instant-runoff count to its end.

        :returns: A list with the name of the winner, or names of all
            candidates tied at the end of the count, in roster order.
        :raises ElectionError: If the roster is empty or incomplete.
        '''
        if not self.candidates:
            raise ElectionError('no candidates registered')
        if not self.is_complete:
            raise ElectionError(
                f'only {len(self.candidates)} of {self.n_candidates}'
                ' candidates registered'
            )
        while True:
            result = self.next_round()
            if result is not None:
                return result

    def next_round(self) -> Optional[List[str]]:
        '''Advance the count by one round.

        :returns: The final result if the count ended on this round (either
            by a majority or a tie of all remaining candidates), None if
            candidates were eliminated and the count goes on.
        '''
        remaining = self.remaining()
        total = self.total_votes()
        logger.info('current vote totals: %s', self.tally())
        for cand in remaining:
            if cand.votes > total // 2:
                logger.info('%s has a majority of %d votes, electing',
                            cand.name, total)
                return [cand.name]
        min_votes = min(cand.votes for cand in remaining)
        lowest = [cand for cand in remaining if cand.votes == min_votes]
        if len(lowest) == len(remaining):
            tied = [cand.name for cand in remaining]
            logger.info('%s are tied at %d votes', tied, min_votes)
            return tied
        logger.info('eliminating %s with %d votes',
                    [cand.name for cand in lowest], min_votes)
        for cand in lowest:
            for ballot in cand.eliminate():
                self._assign(ballot)
        self.rounds += 1
        logger.info('proceeding to round %d', self.rounds + 1)
        return None

    def _assign(self, ballot: Ballot) -> None:
        if self.transfer == 'exhaust':
            top_i = ballot.preference_order()[0]
            if self.candidates[top_i].eliminated:
                top_i = None
        else:
            top_i = ballot.top_candidate(self.candidates)
        if top_i is None:
            logger.debug('%s exhausted', ballot)
            return
        logger.debug('assigning %s to %s', ballot, self.candidates[top_i].name)
        self.candidates[top_i].add_ballot(ballot)
