"""
Analytics error taxonomy.

Only ProposalNotFoundError crosses the engine boundary as a hard failure.
"""


class ProposalNotFoundError(Exception):
    """Proposal is absent or belongs to another company."""

    def __init__(self, proposal_id: str):
        self.proposal_id = proposal_id
        super().__init__(f"Proposal not found: {proposal_id}")


class ComputationFailure(Exception):
    """Unexpected fault while aggregating history or scoring."""
