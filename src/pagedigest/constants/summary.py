"""Summarization prompt and rendering constants."""

# Credential
DEFAULT_CREDENTIAL_KEY = "APIKey"

# Prompt
CONTENT_PLACEHOLDER = "{content}"
DEFAULT_USER_TEMPLATE = CONTENT_PLACEHOLDER
DEFAULT_PROMPT_MAX_BODY_CHARS = 2200
NO_CONTENT_SENTINEL = "Error: No content was provided by the webpage."

DEFAULT_SUMMARY_INSTRUCTIONS = f"""As a skilled summarizer, you are tasked with producing an insightful and succinct summary of the website content presented below. This summary is intended to aid individuals with visual impairments by providing a clear and structured overview. Keep in mind the following:
1. **Detail and Clarity**: Capture the essential details from the website's content, distilling them into a brief yet comprehensive summary. Strive for clarity and precision in your description.
2. **Markdown Formatting**: Use Markdown to enhance the visual layout and readability of the summary. Apply appropriate formatting to organize the content effectively.
3. **Content Focus**: Concentrate exclusively on the material that is explicitly featured or suggested on the website. Do not include extraneous facts or affiliations not mentioned in the site content.
4. **Brevity and Relevance**: Ensure the summary is to the point, avoiding any superfluous details. It should be quicker to read than the full website content, while still being informative.
5. **Emoticon Inclusion**: Incorporate a relevant emoticon into every heading to provide visual cues and maintain an engaging tone.

Structure the summary with this template. Square brackets are placeholders and must not appear in the output:
```markdown
# [Title/Name of Website or Main Headline]
---
[Short introduction or overview of the website's purpose or main theme.]

## [Subheading/Core Topic or Offering 1]
[Description or key points about the first core topic or offering.]

## [Subheading/Core Topic or Offering n]
[Description or key points about the nth core topic or offering.]
```

You may add further subheadings, bullet points or lists to organize the information clearly.

If there is no content or it is not accessible for summarization, respond with: "{NO_CONTENT_SENTINEL}"
"""

# Rendering
RENDER_GRANULARITY_CHARACTER = "character"
RENDER_GRANULARITY_FRAGMENT = "fragment"
DEFAULT_RENDER_UNIT_DELAY = 0.005
DEFAULT_RENDER_MAX_BACKLOG = 4096

# Operation ids
OPERATION_ID_LENGTH = 16
