from langchain_anthropic import ChatAnthropic
from anthropic import APIError, APIConnectionError, RateLimitError, APITimeoutError
from src.models import Classification, ClassifyItemState, FALLBACK_CLASSIFICATION
from prompts import CLASSIFIER_SYSTEM_PROMPT, CLASSIFIER_USER_TEMPLATE
from settings import CLASSIFICATION_MODEL
from src.logger import log

# Instantiate once at module level
_llm = ChatAnthropic(model=CLASSIFICATION_MODEL)
_structured_llm = _llm.with_structured_output(Classification)


def classify_feedback(feedback_text: str) -> dict:
    """
    Classify one piece of feedback by urgency, impact, category and sentiment.

    Never raises: any failure of the LLM call (network, rate limit, schema
    violation) is logged and the fixed fallback classification is returned,
    so one bad entry cannot abort a submission or a batch.

    Returns:
        dict with exactly the keys urgency, impact, category, sentiment
    """
    try:
        result = _structured_llm.invoke([
            {"role": "system", "content": CLASSIFIER_SYSTEM_PROMPT},
            {"role": "user", "content": CLASSIFIER_USER_TEMPLATE.format(feedback_text=feedback_text)}
        ])
        if result is None:
            raise ValueError("classifier returned no structured output")

        return {
            "urgency": result.urgency,
            "impact": result.impact,
            "category": result.category,
            "sentiment": result.sentiment,
        }

    except (APIError, APIConnectionError, RateLimitError, APITimeoutError) as e:
        log(f"\n Classification failed: {type(e).__name__}")
        log(f"    Error: {str(e)[:200]}")  # Truncate long error messages
        log(f"    Feedback: {feedback_text[:80]}")
        log("    Using fallback classification (medium / medium / other / neutral)")
        return dict(FALLBACK_CLASSIFICATION)

    except Exception as e:
        # Schema violations and empty structured output
        log(f"\n Unexpected classification error: {type(e).__name__}")
        log(f"    Error: {str(e)[:200]}")  # Truncate long error messages
        log(f"    Feedback: {feedback_text[:80]}")
        log("    Using fallback classification (medium / medium / other / neutral)")
        return dict(FALLBACK_CLASSIFICATION)


def merge_classification(record: dict, classification: dict) -> dict:
    """Combine a raw entry with its classification, filling optional field defaults."""
    return {
        "customer_name": record.get("customer_name") or "",
        "customer_email": record.get("customer_email") or "",
        "feedback_text": record["feedback_text"],
        "source": record.get("source") or "other",
        "urgency": classification["urgency"],
        "impact": classification["impact"],
        "category": classification["category"],
        "sentiment": classification["sentiment"],
    }


def classify_item(state: ClassifyItemState) -> dict:
    """Batch graph node: classify one fanned-out entry, keeping its input position."""
    record = state["record"]
    classification = classify_feedback(record["feedback_text"])
    return {"results": [{"index": state["index"], "record": merge_classification(record, classification)}]}
