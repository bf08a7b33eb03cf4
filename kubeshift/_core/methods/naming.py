"""
Method names for the discovered resources: e.g. ``getDeployment``.

The names are meant to be guessable by a human who knows the resource kinds:
they are the verb, the kind, and the subresource (if any) glued together --
``get`` + ``Pod`` + ``Log`` for the ``get`` verb of ``pods/log``.

Listing is also available as ``get`` + the plural of the kind,
e.g. ``getPods`` as an alias of ``listPod``. The plurals are naive
(``Kind`` + ``"s"``) unless the kind is in the table of irregular plurals.
The irregulars are not guessed from the word's ending: ``Ingress`` becomes
``Ingresss`` unless listed in the table.
"""
import functools
import importlib.resources
import json
from collections.abc import Mapping


def capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


@functools.cache
def load_plurals() -> Mapping[str, str]:
    """ Load the table of irregular plurals packaged with the library. """
    source = importlib.resources.files(__package__).joinpath('plurals.json')
    return {item['resourceKind']: item['plural'] for item in json.loads(source.read_text())}


def pluralize(kind: str, *, plurals: Mapping[str, str] | None = None) -> str:
    plurals = load_plurals() if plurals is None else plurals
    return plurals.get(kind, f'{kind}s')


def get_method_names(
        verb: str,
        kind: str,
        name: str,
        *,
        plurals: Mapping[str, str] | None = None,
) -> tuple[str, ...]:
    """
    Derive the method names for a verb of a resource (one or two of them).

    The ``name`` is the resource's path segment as discovered, e.g. ``"pods"``
    or ``"pods/log"``; only its subresource part affects the method name.
    """
    suffix = capitalize(name.split('/')[1]) if '/' in name else ''
    names = [f'{verb}{kind}{suffix}']
    if verb == 'list':
        names.append(f'get{pluralize(kind, plurals=plurals)}')
    return tuple(names)
