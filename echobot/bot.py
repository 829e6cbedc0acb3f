import logging

logger = logging.getLogger("echobot.bot")

REPLY_TEMPLATE = "You said: '{message}'"


def echo_reply(message: str) -> str:
    return REPLY_TEMPLATE.format(message=message)


def handle_message(text: str) -> str:
    """
    The bot's whole brain: wrap the user's text in the echo template.
    Deterministic and stateless, the text is used exactly as received.
    """
    reply = echo_reply(text)

    logger.info(f'Received user message: "{text}"')
    logger.info(f'Sending bot response: "{reply}"')

    return reply
