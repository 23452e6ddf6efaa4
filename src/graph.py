from langgraph.graph import StateGraph, START, END

from src.models import BatchState, ReportState
from nodes.classify import classify_item
from nodes.group import fan_out, group_by_urgency
from nodes.report import select_feedback, route_after_select, no_feedback, build_prompt, generate, persist


def create_batch_graph():
    """
    Create the batch classification graph.

    START fans out one classify_item task per entry; all tasks run in the
    same step and group waits for every one of them before partitioning.
    """
    workflow = StateGraph(BatchState)

    workflow.add_node("classify_item", classify_item)
    workflow.add_node("group", group_by_urgency)

    workflow.add_conditional_edges(START, fan_out, ["classify_item", "group"])
    workflow.add_edge("classify_item", "group")
    workflow.add_edge("group", END)

    return workflow.compile()


def create_report_graph():
    """
    Create the report synthesis graph.

    select_feedback → no_feedback (empty window), or
    select_feedback → build_prompt → generate → persist.

    The entity store is passed at invoke time via config["configurable"]["store"].
    """
    workflow = StateGraph(ReportState)

    workflow.add_node("select_feedback", select_feedback)
    workflow.add_node("no_feedback", no_feedback)
    workflow.add_node("build_prompt", build_prompt)
    workflow.add_node("generate", generate)
    workflow.add_node("persist", persist)

    workflow.add_edge(START, "select_feedback")
    workflow.add_conditional_edges(
        "select_feedback",
        route_after_select,
        {"no_feedback": "no_feedback", "build_prompt": "build_prompt"},
    )
    workflow.add_edge("no_feedback", END)
    workflow.add_edge("build_prompt", "generate")
    workflow.add_edge("generate", "persist")
    workflow.add_edge("persist", END)

    return workflow.compile()
