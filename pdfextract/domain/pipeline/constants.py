"""Domain pipeline constants."""

import re

# Per-request workspace layout
WORKSPACE_PREFIX = "pdf-process-"
SPLIT_PDF_FILENAME = "splitted.pdf"
PAGE_IMAGE_PREFIX = "page"
PAGE_IMAGE_SUFFIX = ".jpg"

# pdftoppm names pages <prefix>-<n>.jpg, zero-padding <n> to the width of the last page number
PAGE_IMAGE_PATTERN = re.compile(rf"^{PAGE_IMAGE_PREFIX}-(\d+){re.escape(PAGE_IMAGE_SUFFIX)}$")

DEFAULT_DPI: int = 150

EXTRACT_PROMPT = "Extract all text from this image. Preserve the formatting and structure as much as possible."
DEFAULT_MAX_TOKENS: int = 4096

PAGE_HEADER_TEMPLATE = "\n--- Page {page_id} ---\n{text}\n"
