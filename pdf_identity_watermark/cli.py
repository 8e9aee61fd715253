"""
CLI entry point for identity watermarking.
"""

# Standard Library
import argparse
import pathlib
import sys
import time

# local repo modules
import pdf_identity_watermark as piw
import pdf_identity_watermark.config
import pdf_identity_watermark.errors
import pdf_identity_watermark.files
import pdf_identity_watermark.identity
import pdf_identity_watermark.render


WatermarkRequest = piw.config.WatermarkRequest
WatermarkError = piw.errors.WatermarkError


#============================================
def has_style_overrides(args: argparse.Namespace) -> bool:
	for value in (args.opacity, args.font_size, args.angle, args.line_spacing, args.font_path):
		if value is not None:
			return True
	return args.font_name != piw.config.DEFAULT_FONT_NAME


#============================================
def build_request(args: argparse.Namespace) -> WatermarkRequest:
	"""
	Build a watermark request from CLI args.

	Identity styling is used unless a style flag overrides it.

	Args:
		args: Parsed argparse namespace.

	Returns:
		WatermarkRequest.
	"""
	lines = piw.identity.compose_user_watermark(
		args.full_name,
		args.department,
		args.include_timestamp,
	)
	request = piw.identity.build_identity_request(lines)
	if not has_style_overrides(args):
		return request

	font_size = request.font_size
	if args.font_size is not None:
		font_size = args.font_size
	line_spacing = request.line_spacing
	if args.line_spacing is not None:
		line_spacing = args.line_spacing
	elif args.font_size is not None:
		line_spacing = None
	return WatermarkRequest(
		lines=lines,
		opacity=request.opacity if args.opacity is None else args.opacity,
		font_size=font_size,
		color=request.color,
		angle=request.angle if args.angle is None else args.angle,
		line_spacing=line_spacing,
		font_name=args.font_name,
		font_path=args.font_path,
	)


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Stamp a PDF with a tiled identity watermark.")
	parser.add_argument("input_path", help="Source PDF file.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", required=True, help="Output PDF path.")

	identity_group = parser.add_argument_group("Identity")
	identity_group.add_argument("-n", "--name", dest="full_name", required=True, help="User full name.")
	identity_group.add_argument("-d", "--department", dest="department", required=True, help="User department.")
	identity_group.add_argument("-t", "--timestamp", dest="include_timestamp", action="store_true", help="Add the download time line.")
	identity_group.add_argument("-T", "--no-timestamp", dest="include_timestamp", action="store_false", help="Omit the download time line.")

	style_group = parser.add_argument_group("Style")
	style_group.add_argument("--opacity", dest="opacity", type=float, default=None, help="Opacity (0.0 to 1.0).")
	style_group.add_argument("--font-size", dest="font_size", type=float, default=None, help="Font size in points.")
	style_group.add_argument("--angle", dest="angle", type=float, default=None, help="Rotation in degrees.")
	style_group.add_argument("--line-spacing", dest="line_spacing", type=float, default=None, help="Distance between lines in points.")
	style_group.add_argument("--font-name", dest="font_name", default=piw.config.DEFAULT_FONT_NAME, help="Font name to draw with.")
	style_group.add_argument("--font-path", dest="font_path", default=None, help="TrueType font file to embed.")

	parser.add_argument("-v", "--verbose", dest="verbose", action="store_true", help="Show page progress.")

	parser.set_defaults(
		include_timestamp=True,
		verbose=False,
	)

	args = parser.parse_args(argv)
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> pathlib.Path:
	"""
	Read the input PDF, watermark it and write the result.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Written output path.
	"""
	input_path = pathlib.Path(args.input_path)
	output_path = pathlib.Path(args.output_path)
	print(f"Input PDF: {input_path}")
	print(f"Output PDF: {output_path}")
	if not piw.files.is_pdf_like(input_path.name):
		print(f"Warning: {input_path.name} does not have a .pdf extension")

	start_time = time.perf_counter()
	pdf_bytes = input_path.read_bytes()
	print(f"Input size: {piw.files.format_file_size(len(pdf_bytes))}")

	request = build_request(args)
	for line in request.lines:
		print(f"Watermark line: {line}")
	output_bytes = piw.render.apply_watermark(pdf_bytes, request, verbose=args.verbose)

	written = piw.files.save_pdf_bytes(output_bytes, output_path.name, output_path.parent)
	total_time = time.perf_counter() - start_time
	print(f"Output size: {piw.files.format_file_size(len(output_bytes))}")
	print(f"Timing: total={total_time:.2f}s")
	print(f"Written: {written}")
	return written


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	try:
		run_pipeline(args)
	except WatermarkError as error:
		print(f"Error: {error}", file=sys.stderr)
		sys.exit(1)
	except OSError as error:
		print(f"Error: {error}", file=sys.stderr)
		sys.exit(1)


if __name__ == "__main__":
	main()
