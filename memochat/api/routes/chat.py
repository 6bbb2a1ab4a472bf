"""Chat route: one message in, one reply out.

Per request: load the user's facts, classify tone, remember a stated name,
answer name questions from memory, otherwise build the prompt, generate a
reply and log the exchange to history.
"""

from typing import Any

from apiflask import APIBlueprint

from memochat.agent.generator import generate_reply
from memochat.agent.names import NAME_FACT_KEY, extract_name, is_name_question, name_recall_reply
from memochat.agent.prompts import build_prompt
from memochat.agent.tone import detect_tone
from memochat.api.errors import llm_call_failed_error
from memochat.api.schemas import ChatRequest, ChatResponse
from memochat.api.utils import get_db
from memochat.api.validation import validate_request
from memochat.utils.logging import get_logger, log_payload_snippet

logger = get_logger(__name__)

api = APIBlueprint("chat", __name__, tag="Chat")


@api.route("/chat", methods=["POST"])
@api.doc(responses=[400, 500])
@validate_request(ChatRequest)
def chat(data: ChatRequest) -> tuple[dict[str, Any], int]:
    """Send a message and get a reply.

    Accepts JSON body with:
    - user_id: str - caller-chosen user identifier
    - message: str - the text message

    Returns reply, tone and simulated (True unless the live model answered).
    """
    db = get_db()
    user_id = data.user_id
    message = data.message
    logger.info("Chat request", extra={"user_id": user_id})
    log_payload_snippet(logger, {"user_id": user_id, "message_length": len(message)})

    facts = db.get_facts(user_id)
    tone = detect_tone(message)
    logger.debug(
        "Tone detected",
        extra={"user_id": user_id, "tone": tone.value, "fact_count": len(facts)},
    )

    name = extract_name(message)
    if name:
        db.save_fact(user_id, NAME_FACT_KEY, name)
        facts[NAME_FACT_KEY] = name

    if is_name_question(message):
        # Answered from memory: no model call, nothing logged to history
        logger.info(
            "Answering name question from memory",
            extra={"user_id": user_id, "name_known": NAME_FACT_KEY in facts},
        )
        response = ChatResponse(reply=name_recall_reply(facts), tone=tone, simulated=True)
        return response.model_dump(mode="json"), 200

    try:
        prompt = build_prompt(message, facts, tone)
        reply = generate_reply(prompt)
        db.save_history(user_id, message, reply.text, tone.value)
    except Exception as e:
        logger.error(
            "Chat reply failed",
            extra={"user_id": user_id, "error": str(e)},
            exc_info=True,
        )
        return llm_call_failed_error(str(e))

    logger.info(
        "Chat reply sent",
        extra={"user_id": user_id, "tone": tone.value, "simulated": reply.simulated},
    )
    response = ChatResponse(reply=reply.text, tone=tone, simulated=reply.simulated)
    return response.model_dump(mode="json"), 200
