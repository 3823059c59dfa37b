from pagedigest.constants.llm.general import *  # noqa: F401,F403
from pagedigest.constants.llm.openai import *  # noqa: F401,F403
