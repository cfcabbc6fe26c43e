def short_name(class_name: str) -> str:
    return class_name.strip("\\").rsplit("\\", 1)[-1]


def relation_target(declared: str) -> str:
    """Strip the reverse-relation suffix of dot notation: ``App\\Player.Team`` -> ``App\\Player``."""
    return declared.split(".", 1)[0].strip()


def render_class_name(class_name: str, use_short_name: bool = False) -> str:
    if use_short_name:
        return short_name(class_name)
    return "\\" + class_name.strip("\\")


def extension_class(declared: str) -> str:
    """Class part of an extension entry: ``Versioned('Stage','Live')`` -> ``Versioned``."""
    return declared.split("(", 1)[0].strip().strip("\\")
