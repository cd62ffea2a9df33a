"""Hypothesis strategies for JSON Schema trees.

Generates nested schemas mixing objects, arrays, combinators, ``$defs``
and leaves, with ``format`` annotations and ``additionalProperties``
values scattered throughout.  Property names are drawn to include
``format`` so that a property called ``format`` is exercised too.
"""

from hypothesis import strategies as st

property_names = st.one_of(
    st.sampled_from(["format", "type", "items", "name", "path"]),
    st.text(
        min_size=1,
        max_size=12,
        alphabet=st.characters(whitelist_categories=("L", "N")),
    ),
)

formats = st.sampled_from(["date-time", "uri", "uuid", "email", "int64"])

leaf_schemas = st.builds(
    lambda kind, fmt: {"type": kind, **({"format": fmt} if fmt else {})},
    st.sampled_from(["string", "integer", "number", "boolean", "null"]),
    st.one_of(st.none(), formats),
)


def _object(children):
    return st.builds(
        lambda props, fmt, extra, nullable: {
            "type": ["object", "null"] if nullable else "object",
            "properties": props,
            **({"format": fmt} if fmt else {}),
            **({"additionalProperties": extra} if extra is not None else {}),
        },
        st.dictionaries(property_names, children, max_size=4),
        st.one_of(st.none(), formats),
        st.one_of(st.none(), st.booleans(), leaf_schemas),
        st.booleans(),
    )


def _array(children):
    return st.builds(
        lambda items, fmt: {
            "type": "array",
            "items": items,
            **({"format": fmt} if fmt else {}),
        },
        children,
        st.one_of(st.none(), formats),
    )


def _combinator(children):
    return st.builds(
        lambda key, options: {key: options},
        st.sampled_from(["anyOf", "oneOf", "allOf"]),
        st.lists(children, min_size=1, max_size=3),
    )


schemas = st.recursive(
    leaf_schemas,
    lambda children: st.one_of(_object(children), _array(children), _combinator(children)),
    max_leaves=20,
)

root_schemas = st.builds(
    lambda root, defs: {**root, "$defs": defs} if defs else root,
    _object(schemas),
    st.dictionaries(property_names, schemas, max_size=3),
)
