"""Memory route: read-only view of a user's stored facts."""

from apiflask import APIBlueprint

from memochat.api.utils import get_db
from memochat.utils.logging import get_logger

logger = get_logger(__name__)

api = APIBlueprint("memory", __name__, tag="Memory")


@api.route("/memory/<user_id>", methods=["GET"])
def get_memory(user_id: str) -> dict[str, str]:
    """Return all facts for a user as a flat object, {} if none."""
    facts = get_db().get_facts(user_id)
    logger.info("Facts listed", extra={"user_id": user_id, "count": len(facts)})
    return facts
