from langgraph.types import Send

from src.models import BatchState, URGENCY_LEVELS


def fan_out(state: BatchState):
    """Send every entry to its own classify_item task. Empty batches go straight to group."""
    sends = [
        Send("classify_item", {"index": i, "record": record})
        for i, record in enumerate(state["records"])
    ]
    return sends or "group"


def group_by_urgency(state: BatchState) -> dict:
    """
    Join point of the batch: restore input order and partition by urgency.

    Tasks finish in any order, so results are sorted by the index they were
    sent with. Each bucket is a stable filter of the ordered list.

    Returns:
        Dict with high, medium, low, all and total
    """
    ordered = [item["record"] for item in sorted(state.get("results", []), key=lambda item: item["index"])]

    grouped = {level: [record for record in ordered if record["urgency"] == level] for level in URGENCY_LEVELS}

    return {
        **grouped,
        "all": ordered,
        "total": len(ordered),
    }
