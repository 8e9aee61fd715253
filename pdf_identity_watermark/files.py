"""
File helpers at the edge of the watermark engine.
"""

# Standard Library
import pathlib


PDF_MIME_TYPE = "application/pdf"
PDF_EXTENSIONS = (".pdf",)
PDF_MIME_TYPES = (PDF_MIME_TYPE,)
SIZE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")


#============================================
def is_pdf_like(filename: str, content_type: str | None = None) -> bool:
	"""
	Check whether a file looks like a PDF by extension or MIME type.

	Args:
		filename: File name.
		content_type: Optional MIME type.

	Returns:
		True for a .pdf extension or an application/pdf MIME type.
	"""
	has_extension = filename.lower().endswith(PDF_EXTENSIONS)
	has_mime_type = False
	if content_type:
		has_mime_type = content_type.strip().lower() in PDF_MIME_TYPES
	return has_extension or has_mime_type


#============================================
def sanitize_token(value: str) -> str:
	"""
	Sanitize a string for filenames.

	Args:
		value: Input string.

	Returns:
		Sanitized string.
	"""
	result: list[str] = []
	for char in value:
		if char.isalnum() or char in "-.":
			result.append(char)
		else:
			result.append("_")
	sanitized = "".join(result).strip("_.")
	if not sanitized:
		return "document"
	return sanitized


#============================================
def save_pdf_bytes(
	pdf_bytes: bytes,
	filename: str,
	output_dir: pathlib.Path | str = ".",
) -> pathlib.Path:
	"""
	Save PDF bytes under a caller supplied file name.

	Args:
		pdf_bytes: PDF content.
		filename: Desired file name; a .pdf extension is added if missing.
		output_dir: Target directory, created if needed.

	Returns:
		Path of the written file.
	"""
	name = pathlib.Path(filename).name
	stem = name[:-4] if name.lower().endswith(".pdf") else name
	output_dir = pathlib.Path(output_dir)
	output_dir.mkdir(parents=True, exist_ok=True)
	path = output_dir / f"{sanitize_token(stem)}.pdf"
	path.write_bytes(pdf_bytes)
	return path


#============================================
def format_file_size(num_bytes: int) -> str:
	"""
	Format a byte count for display, e.g. 1536 -> "1.5 KB".
	"""
	if num_bytes <= 0:
		return "0 Bytes"
	size = float(num_bytes)
	unit_index = 0
	while size >= 1024.0 and unit_index < len(SIZE_UNITS) - 1:
		size /= 1024.0
		unit_index += 1
	text = f"{size:.2f}".rstrip("0").rstrip(".")
	return f"{text} {SIZE_UNITS[unit_index]}"
