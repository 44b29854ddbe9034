# User value: This file runs each artwork check on its own so users get precise, field-level print feedback.
from typing import Callable, List

from schemas.preflight import FileMetadata, IssueLevel, PrintSpecification, ValidationIssue
from services.print_specs import (
    DIMENSION_TOLERANCE,
    MAX_ARTWORK_FILE_SIZE_MB,
    PIXELS_PER_INCH,
    RECOMMENDED_ARTWORK_FILE_SIZE_MB,
)

MB = 1024 * 1024

Evaluator = Callable[[FileMetadata, PrintSpecification], List[ValidationIssue]]


# User value: builds issues with one shape so UI rendering stays predictable.
def _issue(
    issue_id: str,
    level: IssueLevel,
    message: str,
    field: str,
    suggestion: str | None = None,
) -> ValidationIssue:
    return ValidationIssue(id=issue_id, level=level, message=message, field=field, suggestion=suggestion)


def _fmt_dpi(value: float) -> str:
    return f"{value:g}"


# User value: rejects formats the product cannot be printed from before anything else is judged.
def evaluate_format(metadata: FileMetadata, spec: PrintSpecification) -> List[ValidationIssue]:
    if metadata.file_format in spec.allowed_formats:
        return []
    allowed = ", ".join(fmt.upper() for fmt in spec.allowed_formats)
    return [
        _issue(
            "unsupported-format",
            "critical",
            f"{metadata.file_format.upper()} files are not accepted for this product.",
            "file_format",
            f"Export your artwork as one of: {allowed}.",
        )
    ]


# User value: warns about blurry prints early by comparing DPI to the product's limits.
def evaluate_resolution(metadata: FileMetadata, spec: PrintSpecification) -> List[ValidationIssue]:
    dpi = metadata.dpi
    if dpi is None:
        return [
            _issue(
                "unknown-resolution",
                "warning",
                "Could not determine the artwork resolution.",
                "dpi",
                f"Make sure your artwork is at least {_fmt_dpi(spec.recommended_dpi)} DPI.",
            )
        ]

    if dpi < spec.min_dpi:
        return [
            _issue(
                "low-resolution",
                "critical",
                f"Resolution is {_fmt_dpi(dpi)} DPI, below the {_fmt_dpi(spec.min_dpi)} DPI minimum.",
                "dpi",
                f"Re-export at {_fmt_dpi(spec.recommended_dpi)} DPI or higher. Upscaling a small image will not add detail.",
            )
        ]
    if dpi < spec.recommended_dpi:
        return [
            _issue(
                "suboptimal-resolution",
                "warning",
                f"Resolution is {_fmt_dpi(dpi)} DPI. {_fmt_dpi(spec.recommended_dpi)} DPI is recommended for sharp prints.",
                "dpi",
                f"Use {_fmt_dpi(spec.recommended_dpi)} DPI artwork for best results.",
            )
        ]
    if dpi > spec.max_dpi:
        return [
            _issue(
                "excessive-resolution",
                "info",
                f"Resolution is {_fmt_dpi(dpi)} DPI, above the {_fmt_dpi(spec.max_dpi)} DPI that prints can show.",
                "dpi",
                f"Downsample to {_fmt_dpi(spec.recommended_dpi)} DPI to shrink the file without visible loss.",
            )
        ]
    return []


# User value: catches colour models that will shift on press so users are not surprised by dull prints.
def evaluate_color_space(metadata: FileMetadata, spec: PrintSpecification) -> List[ValidationIssue]:
    color_space = metadata.color_space
    if color_space == "unknown":
        return [
            _issue(
                "unknown-color-space",
                "warning",
                "Could not determine the artwork color space.",
                "color_space",
                "Save the file in CMYK to make sure colors print accurately.",
            )
        ]

    if spec.requires_cmyk and color_space != "cmyk":
        return [
            _issue(
                "wrong-color-space",
                "critical",
                f"This product must be printed from CMYK artwork, but the file is {color_space.upper()}.",
                "color_space",
                "Convert the document to CMYK in your design software and re-export.",
            )
        ]
    if color_space == "rgb" and spec.preferred_color_space == "cmyk":
        return [
            _issue(
                "non-optimal-color-space",
                "warning",
                "File is in RGB and will be converted to CMYK for printing. Bright colors may shift.",
                "color_space",
                "Convert to CMYK yourself to preview the printed colors.",
            )
        ]
    return []


# User value: compares artwork size to the ordered product so nothing is stretched or cropped unexpectedly.
def evaluate_dimensions(metadata: FileMetadata, spec: PrintSpecification) -> List[ValidationIssue]:
    width_in = metadata.width / PIXELS_PER_INCH
    height_in = metadata.height / PIXELS_PER_INCH
    size_text = f'{width_in:.2f}" x {height_in:.2f}"'
    target_text = f'{spec.width:g}" x {spec.height:g}"'

    lower = 1.0 - DIMENSION_TOLERANCE
    upper = 1.0 + DIMENSION_TOLERANCE

    issues: List[ValidationIssue] = []
    if width_in < spec.width * lower or height_in < spec.height * lower:
        issues.append(
            _issue(
                "undersized-dimensions",
                "critical",
                f"Artwork is {size_text}, smaller than the {target_text} product.",
                "dimensions",
                f"Resize the artboard to {target_text} plus bleed.",
            )
        )
    if width_in > spec.width * upper or height_in > spec.height * upper:
        issues.append(
            _issue(
                "oversized-dimensions",
                "warning",
                f"Artwork is {size_text}, larger than the {target_text} product and will be scaled down.",
                "dimensions",
                f"Resize the artboard to {target_text} plus bleed to control the final layout.",
            )
        )
    return issues


def evaluate_bleed(metadata: FileMetadata, spec: PrintSpecification) -> List[ValidationIssue]:
    if metadata.bleed_present:
        return []
    bleed = max(spec.bleed.top, spec.bleed.right, spec.bleed.bottom, spec.bleed.left)
    return [
        _issue(
            "missing-bleed",
            "warning",
            "No bleed area detected. Edges may show thin white lines after cutting.",
            "bleed_present",
            f'Extend the background {bleed:g}" past the trim line on every edge.',
        )
    ]


# User value: flags transparency the chosen format cannot carry so artwork prints as designed.
def evaluate_transparency(metadata: FileMetadata, spec: PrintSpecification) -> List[ValidationIssue]:
    if not metadata.has_alpha:
        return []
    if metadata.file_format == "jpg":
        return [
            _issue(
                "transparency-with-jpg",
                "critical",
                "JPG files cannot store transparency, so transparent areas will print as a solid background.",
                "has_alpha",
                "Export as PNG or PDF to keep transparent areas.",
            )
        ]
    if metadata.file_format == "pdf":
        return [
            _issue(
                "transparency-with-pdf",
                "warning",
                "PDF contains transparency that may not flatten correctly on press.",
                "has_alpha",
                "Flatten transparency when exporting the PDF.",
            )
        ]
    return []


# User value: stops uploads that are too large to process and warns about slow ones.
def evaluate_file_size(metadata: FileMetadata, spec: PrintSpecification) -> List[ValidationIssue]:
    size_mb = metadata.file_size / MB
    if metadata.file_size > MAX_ARTWORK_FILE_SIZE_MB * MB:
        return [
            _issue(
                "file-too-large",
                "critical",
                f"File size is {size_mb:.1f} MB (maximum: {MAX_ARTWORK_FILE_SIZE_MB} MB).",
                "file_size",
                "Compress embedded images or split the design into multiple files.",
            )
        ]
    if metadata.file_size > RECOMMENDED_ARTWORK_FILE_SIZE_MB * MB:
        return [
            _issue(
                "large-file-size",
                "warning",
                f"File size is {size_mb:.1f} MB (recommended max: {RECOMMENDED_ARTWORK_FILE_SIZE_MB} MB).",
                "file_size",
                "Consider compressing images to reduce file size.",
            )
        ]
    return []


EVALUATORS: tuple[Evaluator, ...] = (
    evaluate_format,
    evaluate_resolution,
    evaluate_color_space,
    evaluate_dimensions,
    evaluate_bleed,
    evaluate_transparency,
    evaluate_file_size,
)


# User value: composes every check in a fixed order so users see the same list for the same file.
def run_all_rules(metadata: FileMetadata, spec: PrintSpecification) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for evaluator in EVALUATORS:
        issues.extend(evaluator(metadata, spec))
    return issues
