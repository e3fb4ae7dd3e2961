"""
QRAC command-line interface.

    qrac encode  FILE   -> FILE_encoded.png
    qrac decode  IMAGE  -> IMAGE_decoded.<detected type>
    qrac correct IMAGE  -> IMAGE_corrected.bmp

Exit status: 0 on success, 1 on error, 2 when a decode finished but the
redundancy checks still report uncorrected errors.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import CodecConfig, SizingTiers, load_config
from .exceptions import QRACError, ImageLoadError
from .module6_pipeline import QRACEncoder, QRACDecoder
from .module7_image_io import (
    ImageFileSource,
    ImageFileSink,
    FileByteSource,
    FileByteSink,
    output_path,
    has_jpeg_extension,
    is_jpeg_file,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_UNCORRECTED = 2


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(verbose: bool = False):
    """Configure logging for the command-line tool."""
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


# =============================================================================
# COMMANDS
# =============================================================================

def run_encode(args, config: dict) -> int:
    codec_config = CodecConfig.from_dict(config)
    tiers = SizingTiers.from_dict(config)
    output_cfg = config.get('output', {})
    fmt = args.format or output_cfg.get('format', 'png')
    alpha = bool(output_cfg.get('alpha', False))

    payload = FileByteSource().read(args.input)
    logger.info(f"Read {len(payload)} bytes from {args.input}")

    encoder = QRACEncoder(codec_config, tiers)
    pixels, metadata = encoder.encode_with_metadata(payload, mode=args.mode)

    destination = args.output or output_path(args.input, '_encoded', fmt)
    ImageFileSink(alpha=alpha).write(destination, pixels)

    print(
        f"Encoded {metadata['payload_bytes']} bytes "
        f"({metadata['symbol_count']} symbols) into "
        f"{metadata['width']}x{metadata['height']} image: {destination}"
    )
    return EXIT_OK


def run_decode(args, config: dict) -> int:
    codec_config = CodecConfig.from_dict(config)

    pixels = ImageFileSource().read(args.input)
    decoder = QRACDecoder(codec_config)
    result, metadata = decoder.decode_with_metadata(pixels)

    destination = args.output or output_path(args.input, '_decoded', result.content_type)
    FileByteSink().write(destination, result.payload)

    print(f"Decoded {metadata['payload_bytes']} bytes ({result.content_type}): {destination}")
    if not result.all_corrected:
        print("Warning: data may contain uncorrectable errors", file=sys.stderr)
        return EXIT_UNCORRECTED
    return EXIT_OK


def run_correct(args, config: dict) -> int:
    codec_config = CodecConfig.from_dict(config)
    fmt = args.format or 'bmp'

    # Lossy input has already lost the anchor values
    if has_jpeg_extension(args.input) or is_jpeg_file(args.input):
        raise ImageLoadError(
            f"Cannot correct JPEG image {args.input}: use the original PNG or BMP"
        )

    pixels = ImageFileSource().read(args.input)
    decoder = QRACDecoder(codec_config)
    corrected, report = decoder.repair(pixels)

    destination = args.output or output_path(args.input, '_corrected', fmt)
    ImageFileSink(alpha=True).write(destination, corrected)

    if report.already_pure:
        print(f"Image already on anchors, copied to {destination}")
    else:
        print(
            f"Corrected {report.deviating_values} channel values "
            f"({report.deviation_ratio:.2%}): {destination}"
        )
    return EXIT_OK


COMMANDS = {
    'encode': run_encode,
    'decode': run_decode,
    'correct': run_correct,
}


# =============================================================================
# COMMAND-LINE INTERFACE
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='qrac',
        description='Encode files into quantized RGB images and back',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Encode a file into the smallest square-ish PNG
  qrac encode report.pdf

  # Fixed grid sizes, BMP output
  qrac encode archive.zip --mode auto --format bmp

  # Decode (output extension follows the detected content type)
  qrac decode report_encoded.png -o report.pdf

  # Snap a slightly altered image back onto anchor values
  qrac correct report_encoded.png
        """
    )

    parser.add_argument(
        'command',
        choices=sorted(COMMANDS),
        help='Operation to perform'
    )

    parser.add_argument(
        'input',
        type=str,
        help='Input file (payload for encode, image for decode/correct)'
    )

    parser.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        help='Output path (default: derived from the input name)'
    )

    parser.add_argument(
        '--mode',
        choices=['adaptive', 'auto'],
        default='adaptive',
        help='Grid sizing for encode (default: adaptive)'
    )

    parser.add_argument(
        '--format',
        choices=['png', 'bmp'],
        default=None,
        help='Image format for encode/correct output (default: png for encode, bmp for correct)'
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to configuration YAML file (default: packaged default_config.yaml)'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    return parser


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the qrac command."""
    args = build_parser().parse_args(argv)

    setup_logging(verbose=args.verbose)

    try:
        config = load_config(args.config)
        return COMMANDS[args.command](args, config)
    except (QRACError, OSError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}", exc_info=args.verbose)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())
