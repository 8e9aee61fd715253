"""
Text sanitizing for fonts with a limited character repertoire.
"""

# PIP3 modules
import reportlab.pdfbase.pdfmetrics

# local repo modules
import pdf_identity_watermark as piw
import pdf_identity_watermark.config


REPLACEMENT_CHAR = piw.config.REPLACEMENT_CHAR

# Vietnamese tone-marked letters grouped by their plain Latin base letter.
VIETNAMESE_GROUPS = {
	"a": "àáạảãâầấậẩẫăằắặẳẵ",
	"e": "èéẹẻẽêềếệểễ",
	"i": "ìíịỉĩ",
	"o": "òóọỏõôồốộổỗơờớợởỡ",
	"u": "ùúụủũưừứựửữ",
	"y": "ỳýỵỷỹ",
	"d": "đ",
	"A": "ÀÁẠẢÃÂẦẤẬẨẪĂẰẮẶẲẴ",
	"E": "ÈÉẸẺẼÊỀẾỆỂỄ",
	"I": "ÌÍỊỈĨ",
	"O": "ÒÓỌỎÕÔỒỐỘỔỖƠỜỚỢỞỠ",
	"U": "ÙÚỤỦŨƯỪỨỰỬỮ",
	"Y": "ỲÝỴỶỸ",
	"D": "Đ",
}

TRANSLITERATION_TABLE: dict[str, str] = {
	char: base
	for base, chars in VIETNAMESE_GROUPS.items()
	for char in chars
}


#============================================
def is_printable_ascii(char: str) -> bool:
	return " " <= char <= "~"


#============================================
def sanitize_text(text: str) -> str:
	"""
	Transliterate characters outside printable ASCII to plain Latin letters.

	Characters missing from the transliteration table pass through
	unchanged, so the result always has the same length as the input.

	Args:
		text: Input text.

	Returns:
		Sanitized text.
	"""
	if not text:
		return text
	result: list[str] = []
	for char in text:
		if is_printable_ascii(char):
			result.append(char)
		else:
			result.append(TRANSLITERATION_TABLE.get(char, char))
	return "".join(result)


#============================================
def font_supports_char(font, char: str) -> bool:
	"""
	Check whether a ReportLab font can draw a character.

	Args:
		font: ReportLab font object.
		char: Single character.

	Returns:
		True if the font has a glyph or encoding slot for the character.
	"""
	if ord(char) < 0x20:
		return False
	face = getattr(font, "face", None)
	char_to_glyph = getattr(face, "charToGlyph", None)
	if char_to_glyph is not None:
		return ord(char) in char_to_glyph
	# standard Type 1 fonts use WinAnsiEncoding
	try:
		char.encode("cp1252")
	except UnicodeEncodeError:
		return False
	return True


#============================================
def coerce_to_font(text: str, font_name: str) -> str:
	"""
	Replace characters the font cannot draw with a placeholder.

	Args:
		text: Sanitized text.
		font_name: Registered ReportLab font name.

	Returns:
		Text of the same length containing only drawable characters.
	"""
	font = reportlab.pdfbase.pdfmetrics.getFont(font_name)
	result: list[str] = []
	for char in text:
		if font_supports_char(font, char):
			result.append(char)
		else:
			result.append(REPLACEMENT_CHAR)
	return "".join(result)
