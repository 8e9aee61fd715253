"""
Shared configuration, constants and request types.
"""

# Standard Library
import dataclasses
import math

# local repo modules
import pdf_identity_watermark as piw
import pdf_identity_watermark.errors


InvalidRequestError = piw.errors.InvalidRequestError

DEFAULT_FONT_NAME = "Helvetica"
DEFAULT_OPACITY = 0.3
DEFAULT_FONT_SIZE = 50.0
DEFAULT_COLOR = (0.7, 0.7, 0.7)
DEFAULT_ANGLE = -45.0
DEFAULT_LINE_SPACING_FACTOR = 1.2
DEFAULT_TILE_SPACING = 200.0

IDENTITY_OPACITY = 0.25
IDENTITY_FONT_SIZE = 42.0
IDENTITY_COLOR = (0.6, 0.6, 0.6)
IDENTITY_ANGLE = -45.0
IDENTITY_LINE_SPACING = 50.0
# Asia/Ho_Chi_Minh, no daylight saving
IDENTITY_UTC_OFFSET_HOURS = 7
IDENTITY_TIMEZONE_NAME = "ICT"
TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M:%S"

FALLBACK_CHAR_WIDTH_FACTOR = 0.6
TILE_FONT_SCALE = 0.8
TILE_OPACITY_SCALE = 0.6
REPLACEMENT_CHAR = "?"
PROGRESS_BAR_WIDTH = 20


@dataclasses.dataclass
class WatermarkRequest:
	lines: list[str]
	opacity: float = DEFAULT_OPACITY
	font_size: float = DEFAULT_FONT_SIZE
	color: tuple[float, float, float] = DEFAULT_COLOR
	angle: float = DEFAULT_ANGLE
	line_spacing: float | None = None
	font_name: str = DEFAULT_FONT_NAME
	font_path: str | None = None
	tile_spacing: float = DEFAULT_TILE_SPACING

	def __post_init__(self):
		if isinstance(self.lines, str):
			self.lines = [self.lines]
		self.lines = list(self.lines)
		if self.line_spacing is None:
			self.line_spacing = self.font_size * DEFAULT_LINE_SPACING_FACTOR
		self.color = tuple(self.color)
		validate_request(self)


@dataclasses.dataclass(frozen=True)
class PageGeometry:
	width: float
	height: float
	left: float = 0.0
	bottom: float = 0.0

	@property
	def center(self) -> tuple[float, float]:
		return (self.width / 2.0, self.height / 2.0)

	def contains(self, x: float, y: float) -> bool:
		"""
		Check whether a point lies within the page box, edges included.
		"""
		return 0.0 <= x <= self.width and 0.0 <= y <= self.height


@dataclasses.dataclass(frozen=True)
class LineAnchor:
	x: float
	y: float
	text: str


@dataclasses.dataclass(frozen=True)
class BlockAnchor:
	base_x: float
	base_y: float
	per_line: list[LineAnchor]
	max_width: float
	total_height: float


@dataclasses.dataclass(frozen=True)
class TilePlacement:
	x: float
	y: float


#============================================
def validate_request(request: WatermarkRequest) -> None:
	"""
	Validate watermark request parameters.

	Args:
		request: WatermarkRequest to check.

	Raises:
		InvalidRequestError: When a parameter is out of range.
	"""
	if not request.lines:
		raise InvalidRequestError("Watermark needs at least one line of text.")
	for line in request.lines:
		if not isinstance(line, str):
			raise InvalidRequestError(f"Watermark lines must be strings, got {type(line).__name__}.")
	numeric_fields = {
		"opacity": request.opacity,
		"font_size": request.font_size,
		"angle": request.angle,
		"line_spacing": request.line_spacing,
		"tile_spacing": request.tile_spacing,
	}
	for field_name, value in numeric_fields.items():
		if not isinstance(value, (int, float)) or not math.isfinite(value):
			raise InvalidRequestError(f"{field_name} must be a finite number, got {value!r}")
	if not 0.0 <= request.opacity <= 1.0:
		raise InvalidRequestError(f"Opacity must be between 0.0 and 1.0, got {request.opacity}")
	if request.font_size <= 0:
		raise InvalidRequestError(f"Font size must be positive, got {request.font_size}")
	if request.line_spacing <= 0:
		raise InvalidRequestError(f"Line spacing must be positive, got {request.line_spacing}")
	if request.tile_spacing <= 0:
		raise InvalidRequestError(f"Tile spacing must be positive, got {request.tile_spacing}")
	if len(request.color) != 3:
		raise InvalidRequestError(f"Color must be an RGB triple, got {request.color}")
	for channel in request.color:
		if not isinstance(channel, (int, float)) or not math.isfinite(channel):
			raise InvalidRequestError(f"Color channels must be finite numbers, got {request.color}")
		if not 0.0 <= channel <= 1.0:
			raise InvalidRequestError(f"Color channels must be between 0.0 and 1.0, got {request.color}")
	if not request.font_name:
		raise InvalidRequestError("Font name must not be empty.")
