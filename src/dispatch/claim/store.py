"""Delivery claim store — create-if-absent writes and availability reads."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from dispatch.claim.claim import ClaimStatus, DeliveryClaim
from dispatch.utils.query import fetch_all


def post_if_absent(claim: DeliveryClaim) -> tuple[DeliveryClaim, bool]:
    """Persist ``claim`` unless a claim with the same id already exists.

    Returns the stored claim and whether this call created it. The check and
    the write are separate store operations, so two writers racing on the
    same order can both see "absent"; both then write the same id and the
    later write wins.
    """
    repo = current_domain.repository_for(DeliveryClaim)
    try:
        return repo.get(str(claim.id)), False
    except ObjectNotFoundError:
        pass

    repo.add(claim)
    return claim, True


def available_claims() -> list[DeliveryClaim]:
    repo = current_domain.repository_for(DeliveryClaim)
    claims = fetch_all(repo._dao.query.filter(status=ClaimStatus.AVAILABLE.value))
    return sorted(claims, key=lambda claim: claim.created_at, reverse=True)


def claims_for_order(order_id: str) -> list[DeliveryClaim]:
    repo = current_domain.repository_for(DeliveryClaim)
    return fetch_all(repo._dao.query.filter(order_id=order_id))
