"""
Constants and configuration values for the OCR/translation workflow.
"""

# Literal answer the OCR model gives for an image without text
NO_TEXT_SENTINEL = 'No text found'

# Summary line closing an OCR answer: "Number of text blocks: N"
SUMMARY_LINE_PATTERN = r'^Number of text block'

# Declared block count, last occurrence wins
DECLARED_COUNT_PATTERN = r'Number of text block(?:s)?\s*[:\-]\s*(\d+)'

# Numbered block marker: "1: text", "1. text", "1) text"
ORDINAL_LINE_PATTERN = r'^\s*(\d+)\s*[:\.\)]\s*(.*)$'

# Coordinate annotation: "(from: {x:12, y:34}, to: {x:56, y:78})"
COORDINATE_PATTERN = (
    r'\(\s*from:\s*\{\s*x\s*:\s*(-?\d+)\s*,\s*y\s*:\s*(-?\d+)\s*\}\s*,'
    r'\s*to:\s*\{\s*x\s*:\s*(-?\d+)\s*,\s*y\s*:\s*(-?\d+)\s*\}\s*\)'
)

# Trailing parenthetical mentioning from/to, then any trailing parenthetical
TRAILING_COORDINATE_PAREN = r'\s*\([^)]*(from|to)[^)]*\)\s*$'
TRAILING_PAREN = r'\s*\([^)]*\)\s*$'

# Straight and curly quotes trimmed from both ends of a block
QUOTE_CHARS = '"\'“”‘’'

HTML_TAG_PATTERN = r'</?[^>]+(>|$)'

# Coordinate pairing modes for ResponseParser
PAIRING_LINE = 'line'
PAIRING_POSITIONAL = 'positional'
PAIRING_MODES = (PAIRING_LINE, PAIRING_POSITIONAL)

# Text id format: "{image_id}_{ordinal}"
TEXT_ID_TEMPLATE = '{image_id}_{ordinal}'

# OCR prompt, formatted with the image dimensions
OCR_PROMPT_TEMPLATE = """You are an OCR assistant. Read all visible text in the given image
and return only the readable text. Do not describe the image or repeat the base64 data.
Return plain text only, formatted for readability by numbering each text block you recognize.
Also keep track of the position of each text block in the image, using coordinates.
Coordinates are given as (x,y) pairs, where (0,0) is the top-left corner of the image.
The 'from' coordinate is the top-left corner of the text block, and the 'to' coordinate is
the bottom-right corner. The coordinates should be integers representing pixel positions in the image
relative to the image dimensions. If no text can be found, return "No text found". When two or more
short text segments appear close together (within the same logical phrase or line group), merge them
into a single text block rather than splitting them. Treat small vertical spacing as part of the same
block if the text forms a continuous sentence or title.
Do not add, infer, or search for any information that is not explicitly readable.
Do not use external knowledge or guess missing words based on what the image might represent.
Apply the same grouping logic for all languages, English, Chinese, or others, merging vertically or
horizontally aligned characters that form a single title or phrase.
When estimating coordinates, ensure that (from) and (to) precisely cover only the visible text area.
Avoid random or uniform coordinates that do not match the actual layout.
Keep numeric elements together with their associated words (e.g. "2025" and "Festival")
in a single text block whenever they belong to the same phrase or visual line.
The incoming image's dimensions are {width}x{height}. Label text blocks with accurate coordinates
relative to the image's dimensions.
Strictly follow this format, with no extra commentary:
1: <text> (from: {{x:12, y:34}}, to: {{x:56, y:78}})
2: <text> (from: {{x:90, y:12}}, to: {{x:34, y:56}})
...
N: <text> (from: {{x:A, y:B}}, to: {{x:C, y:D}})
Number of text blocks: N"""

TRANSLATION_PROMPT_TEMPLATE = (
    "Translate the following text to {target_language}: {text}\n"
    "Return only the translated text, without quotes or explanations."
)

# Default OCR parameters
DEFAULT_OCR_PARAMS = {
    'max_tokens': 4096,
    'temperature': 0.0,
}
