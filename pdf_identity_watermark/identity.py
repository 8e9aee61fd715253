"""
Identity watermarks built from a user's name and department.
"""

# Standard Library
import asyncio
import datetime

# local repo modules
import pdf_identity_watermark as piw
import pdf_identity_watermark.config
import pdf_identity_watermark.render


WatermarkRequest = piw.config.WatermarkRequest

IDENTITY_TIMEZONE = datetime.timezone(
	datetime.timedelta(hours=piw.config.IDENTITY_UTC_OFFSET_HOURS),
	piw.config.IDENTITY_TIMEZONE_NAME,
)
TIMESTAMP_FORMAT = piw.config.TIMESTAMP_FORMAT


#============================================
def format_timestamp(now: datetime.datetime | None = None) -> str:
	"""
	Format a moment as DD/MM/YYYY HH:MM:SS in the identity timezone.

	Args:
		now: Moment to format; naive values are taken as UTC. Defaults to now.

	Returns:
		Timestamp string.
	"""
	if now is None:
		now = datetime.datetime.now(datetime.timezone.utc)
	elif now.tzinfo is None:
		now = now.replace(tzinfo=datetime.timezone.utc)
	return now.astimezone(IDENTITY_TIMEZONE).strftime(TIMESTAMP_FORMAT)


#============================================
def compose_user_watermark(
	full_name: str,
	department: str,
	include_timestamp: bool = True,
	now: datetime.datetime | None = None,
) -> list[str]:
	"""
	Build watermark lines for a user.

	Args:
		full_name: User's full name.
		department: User's department.
		include_timestamp: Append the download time as a third line.
		now: Moment to stamp, defaults to the current time.

	Returns:
		List of watermark lines.
	"""
	lines = [full_name, department]
	if include_timestamp:
		lines.append(format_timestamp(now))
	return lines


#============================================
def build_identity_request(lines: list[str]) -> WatermarkRequest:
	"""
	Wrap identity lines in a request with the identity styling.
	"""
	return WatermarkRequest(
		lines=lines,
		opacity=piw.config.IDENTITY_OPACITY,
		font_size=piw.config.IDENTITY_FONT_SIZE,
		color=piw.config.IDENTITY_COLOR,
		angle=piw.config.IDENTITY_ANGLE,
		line_spacing=piw.config.IDENTITY_LINE_SPACING,
	)


#============================================
def watermark_with_identity(
	pdf_bytes: bytes,
	full_name: str,
	department: str,
	include_timestamp: bool = True,
	now: datetime.datetime | None = None,
	verbose: bool = False,
) -> bytes:
	"""
	Stamp every page of a PDF with the user's name, department and time.

	Args:
		pdf_bytes: Input PDF bytes.
		full_name: User's full name.
		department: User's department.
		include_timestamp: Include the download timestamp line.
		now: Moment to stamp, defaults to the current time.
		verbose: Print page progress.

	Returns:
		Watermarked PDF bytes.
	"""
	lines = compose_user_watermark(full_name, department, include_timestamp, now)
	request = build_identity_request(lines)
	return piw.render.apply_watermark(pdf_bytes, request, verbose=verbose)


#============================================
async def watermark_with_identity_async(
	pdf_bytes: bytes,
	full_name: str,
	department: str,
	include_timestamp: bool = True,
) -> bytes:
	return await asyncio.to_thread(
		watermark_with_identity,
		pdf_bytes,
		full_name,
		department,
		include_timestamp,
	)
