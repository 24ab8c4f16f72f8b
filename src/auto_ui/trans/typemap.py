"""Auto type names → Python annotations for generated fields."""

DEFAULT_TYPES: dict[str, str] = {
    "int": "int",
    "i32": "int",
    "i64": "int",
    "u32": "int",
    "u64": "int",
    "uint": "int",
    "str": "str",
    "string": "str",
    "bool": "bool",
    "float": "float",
    "f32": "float",
    "f64": "float",
    "double": "float",
}


class TypeMap:
    """
    Pluggable type mapping.

    Known scalars map through the table, arrays (``[]T``) become
    ``list[T]``, capitalised names are user types kept verbatim and anything
    else falls back to ``Any``.

    Examples:
        >>> TypeMap().annotation("[]int")
        'list[int]'
    """

    def __init__(self, overrides: dict[str, str] | None = None) -> None:
        self.types = {**DEFAULT_TYPES, **(overrides or {})}

    def register(self, auto_name: str, python_name: str) -> None:
        self.types[auto_name] = python_name

    def annotation(self, type_name: str) -> str:
        if type_name.startswith("[]"):
            return f"list[{self.annotation(type_name[2:])}]"
        if type_name in self.types:
            return self.types[type_name]
        if type_name[:1].isupper() and type_name.isidentifier():
            return type_name
        return "Any"
