"""Constants for PageDigest."""

from pagedigest.constants.llm import *  # noqa: F401,F403
from pagedigest.constants.streaming import *  # noqa: F401,F403
from pagedigest.constants.summary import *  # noqa: F401,F403
