EXTRACTION_SYSTEM_PROMPT = """You are extracting individual customer feedback entries from an uploaded file.

The file is either a CSV export or the text of a PDF document. Return every feedback entry it contains, in the order they appear.

For CSV files:
- Each row is one entry. The header row is not an entry.
- Expected columns are customer_name, customer_email, feedback_text and source, but column names may differ slightly (e.g. "Name", "Email", "Comment", "Channel"). Map them to the closest field.

For PDF documents:
- Text should be structured with clear feedback entries. Treat each distinct comment from a customer as one entry.
- Skip headings, page numbers, and boilerplate that is not customer feedback.

For every entry:
- feedback_text is required. Copy the customer's words verbatim; do not summarize or correct them.
- customer_name and customer_email only when the file states them. Never invent them.
- source only when the file states the channel. Use one of: email, support_ticket, survey, call, chat, social_media, other.

If the file contains no feedback, return an empty list.
"""

EXTRACTION_USER_TEMPLATE = """Extract feedback entries from this {file_kind} file ({file_name}):

{content}"""
