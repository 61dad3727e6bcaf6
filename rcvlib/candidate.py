'''Candidates standing in a ranked-choice election.

A :class:`Candidate` holds the ballots that currently count for it, i.e.
the ballots on which it is the best-ranked candidate still in the contest.
When the candidate is eliminated, the ballots are handed over to the election
to be transferred to other candidates.
'''

from __future__ import annotations

from typing import Any, List, TYPE_CHECKING

if TYPE_CHECKING:
    from rcvlib.vote import Ballot


class CandidateError(Exception):
    '''A candidate was used in a way its state does not permit.

    E.g. giving a ballot to an eliminated candidate or eliminating a candidate
    for the second time.

    :param candidate: Candidate that was misused.
    :param reason: What was wrong.
    '''
    def __init__(self, candidate: Any, reason: str = ''):
        self.candidate = candidate
        self.reason = reason
        message = f'invalid operation on candidate {candidate}'
        if reason:
            message += f': {reason}'
        super().__init__(message)


class Candidate:
    '''A candidate in a single-seat ranked-choice election.

    :param name: Name of the candidate, in any customary text format.
    '''
    def __init__(self, name: str):
        self._name = name
        self.ballots: List[Ballot] = []
        self.eliminated = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def votes(self) -> int:
        '''Number of ballots currently counting for the candidate.'''
        return len(self.ballots)

    def add_ballot(self, ballot: Ballot) -> None:
        '''Assign a ballot to the candidate.

        :param ballot: A ballot not held by any other candidate.
        :raises CandidateError: If the candidate has been eliminated.
        '''
        if self.eliminated:
            raise CandidateError(self, 'already eliminated')
        self.ballots.append(ballot)

    def eliminate(self) -> List[Ballot]:
        '''Remove the candidate from the contest.

        :returns: The ballots the candidate held; the candidate is left with
            none.
        :raises CandidateError: If the candidate has already been eliminated.
        '''
        if self.eliminated:
            raise CandidateError(self, 'already eliminated')
        self.eliminated = True
        released, self.ballots = self.ballots, []
        return released

    def __repr__(self) -> str:
        return (
            f'<Candidate({self.name},{self.votes}'
            + (',eliminated' if self.eliminated else '')
            + ')>'
        )
