"""
Transform registry for Opkit.

This module builds the table of whole-blob transforms a session can run,
binding each token processor to the batch machinery and recording which
buffer it reads from and writes to.
"""

from typing import TYPE_CHECKING, Any, Dict, List

if TYPE_CHECKING:
    from .context import TransformKind, TransformStep
    from .processors.numeric import NumericCodec


def create_transform_registry(codec: 'NumericCodec', batch_size: int) -> Dict['TransformKind', 'TransformStep']:
    """
    Create the transform table used by a session.

    SOURCE AND TARGET BUFFERS:

    encrypt / decrypt / format_flip  - read input, write output
    normalize_comma                  - read input, write input
    add_quotes / strip_quotes        - read input, write output, or rewrite a
                                       buffer the caller picks

    Args:
        codec: Numeric codec configured at startup
        batch_size: Chunk size handed to the batch processor

    Returns:
        Mapping from TransformKind to its TransformStep
    """
    from .batch import apply_batch, apply_per_char, flip_format
    from .context import Buffer, TransformKind, TransformStep
    from .processors.commas import normalize_comma
    from .processors.quotes import add_quotes, strip_quotes

    def per_token(transform):
        return lambda text, stats: apply_batch(text, transform, batch_size, stats=stats)

    steps = [
        TransformStep(
            kind=TransformKind.ENCRYPT,
            processor=per_token(codec.encode),
            description='Encode numeric ids',
        ),
        TransformStep(
            kind=TransformKind.DECRYPT,
            processor=per_token(codec.decode),
            description='Decode numeric ids',
        ),
        TransformStep(
            kind=TransformKind.FORMAT_FLIP,
            processor=lambda text, stats: flip_format(text, batch_size, stats=stats),
            description='Switch between comma and newline separated',
        ),
        TransformStep(
            kind=TransformKind.ADD_QUOTES,
            processor=per_token(add_quotes),
            description='Add single quotes',
            source=None,
            target=None,
        ),
        TransformStep(
            kind=TransformKind.STRIP_QUOTES,
            processor=per_token(strip_quotes),
            description='Remove single quotes',
            source=None,
            target=None,
        ),
        TransformStep(
            kind=TransformKind.NORMALIZE_COMMA,
            processor=lambda text, stats: apply_per_char(text, normalize_comma, batch_size, stats=stats),
            description='Replace full-width commas with ASCII commas',
            target=Buffer.INPUT,
        ),
    ]
    return {step.kind: step for step in steps}


def get_available_transforms(registry: Dict['TransformKind', 'TransformStep']) -> List[Dict[str, Any]]:
    """
    Get list of available transforms with their metadata.

    Returns:
        List of dictionaries with kind, description and buffer routing
    """
    return [
        {
            'kind': step.kind.value,
            'description': step.description,
            'source': step.source.value if step.source else None,
            'target': step.target.value if step.target else None,
            'buffer_selectable': step.buffer_selectable,
        }
        for step in registry.values()
    ]


def parse_transform_kind(name: str) -> 'TransformKind':
    """
    Resolve a transform name (e.g. ``"strip_quotes"``) to its TransformKind.

    Raises:
        ValueError: if the name is not a known transform
    """
    from .context import TransformKind

    try:
        return TransformKind(name.strip().lower())
    except ValueError:
        known = ", ".join(kind.value for kind in TransformKind)
        raise ValueError(f"Unknown transform '{name}' (known: {known})") from None
