"""
Header Continuity Repair.

Some polling protocols put the address of the next poll in the ``Location``
header of the previous response. Once interior interactions are removed,
that header would point at an interaction that no longer exists, so each
retained interaction is relinked to its new successor.
"""

import logging
from typing import Sequence

from ..models.interaction import Interaction
from ..urls import same_url

logger = logging.getLogger(__name__)

LOCATION_HEADER = "Location"


def relink_location_header(prior: Interaction, next_interaction: Interaction) -> None:
    """
    Point prior's ``Location`` header at next's request URL.

    If both requests are for the exact same URL (query included) the header
    is removed instead, since the replay simply repeats the request.
    """
    next_url = next_interaction.full_url
    if same_url(prior.full_url, next_url):
        prior.response.remove_header(LOCATION_HEADER)
    else:
        prior.response.set_header(LOCATION_HEADER, next_url)


def relink_location_headers(interactions: Sequence[Interaction]) -> None:
    """
    Relink ``Location`` headers across a retained sequence, in order.

    The last interaction has no successor and is left untouched. Running
    this twice gives the same headers as running it once.

    Args:
        interactions: The retained interactions, in recorded order
    """
    for prior, next_interaction in zip(interactions, interactions[1:]):
        relink_location_header(prior, next_interaction)
    logger.debug(f"Relinked Location headers across {len(interactions)} interactions")
