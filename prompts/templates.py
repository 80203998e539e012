"""Frame document templates and the topic extraction prompt."""

from __future__ import annotations

from string import Template

INITIAL_IMAGE_URL = "https://i.imgur.com/L1NnO1P.png"

DEFAULT_MESSAGE = "Make an AI cover image for your cast!"
APOLOGY_MESSAGE = "Something went wrong, mind trying again?"

INPUT_PLACEHOLDER = "Paste your cast text here..."

SHARE_COMPOSE_URL = "https://warpcast.com/~/compose?text=&embeds[]="

# --- Frame documents ---

INITIAL_FRAME = Template(
    """<!DOCTYPE html>
<html>
<head>
  <title>AI Cover</title>
  <meta property="og:title" content="AI Cover" />
  <meta property="fc:frame" content="vNext" />
  <meta property="fc:frame:image" content="$image_url" />
  <meta property="fc:frame:input:text" content="$placeholder" />
  <meta property="fc:frame:button:1" content="Generate Image!" />
</head>
<body>$message</body>
</html>
"""
)

RESULT_FRAME = Template(
    """<!DOCTYPE html>
<html>
<head>
  <title>Result</title>
  <meta property="og:title" content="Result" />
  <meta property="fc:frame" content="vNext" />
  <meta property="fc:frame:image" content="$image_url" />
  <meta property="fc:frame:button:1" content="Add to Cast!" />
  <meta property="fc:frame:button:1:action" content="link" />
  <meta property="fc:frame:button:1:target" content="$share_url" />
  <meta property="fc:frame:button:2" content="Start Over" />
</head>
<body>Your cover image is ready!</body>
</html>
"""
)

# --- Topic extraction ---

TOPIC_EXTRACTION_PROMPT = Template(
    'Analyze this text: "$text". Find the name of the most important, most '
    "prominent brand, project, app or concept in it. Your answer must be ONLY "
    'the name of that thing (e.g. "Vercel", "OpenAI", "React", "Coffee"). '
    "Write NOTHING else."
)
