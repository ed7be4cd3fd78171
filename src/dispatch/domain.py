"""Dispatch bounded context — order packing and delivery dispatch.

Owns the wholesaler-side order lifecycle, the claimable delivery records
vehicle owners pick jobs from, the per-owner notifications announcing those
jobs, and the activity trail of who did what.
"""

from protean.domain import Domain

from dispatch.utils.logging import configure_logging, get_logger

configure_logging(log_dir="logs", log_file_prefix="dispatch")

logger = get_logger(__name__)

# Domain Composition Root
dispatch = Domain(name="dispatch")
