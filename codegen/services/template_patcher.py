"""
Template patcher - wire a generated component into the playground entry file.

Three textual insertions are made into the bootstrap source:
    1. a file-level import for the component, before the decorator
    2. the component class in the decorator's imports array
    3. the component selector inside the template string

Insertions are regex/index based and best-effort. Missing anchors never raise;
the text is patched wherever the scan lands.
"""

import re
from dataclasses import dataclass

from codegen.models import GeneratedFile
from codegen.utils.logging import get_logger

logger = get_logger(__name__)

DECORATOR_TAG = "@Component({"
COMPONENT_TYPE = "Component"

UNKNOWN_COMPONENT_NAME = "UnknownComponent"
UNKNOWN_SELECTOR = "app-unknown"
UNKNOWN_IMPORT_PATH = "unknown.component"
DEFAULT_SELECTOR = "app-unknown-component"

SELECTOR_PATTERN = re.compile(r"selector:.*'(.*?)'")
IMPORTS_PATTERN = re.compile(r"imports *:.*\[")
TEMPLATE_PATTERN = re.compile(r"template *:.*`")
QUOTE_CHARS = ("`", "'", '"')


@dataclass
class ComponentRef:
    """What the entry file needs to know about the generated component."""

    class_name: str
    selector: str
    import_path: str

    @property
    def import_statement(self) -> str:
        return f"import {{ {self.class_name} }} from '{self.import_path}';"


PLACEHOLDER_COMPONENT = ComponentRef(
    class_name=UNKNOWN_COMPONENT_NAME,
    selector=UNKNOWN_SELECTOR,
    import_path=UNKNOWN_IMPORT_PATH,
)


def split_at_index(idx: int, text: str) -> tuple[str, str]:
    """Split text into (text[:idx], text[idx:])."""
    return text[:idx], text[idx:]


def extract_selector(code: str) -> str | None:
    """Return the single-quoted selector value from component source, if any."""
    match = SELECTOR_PATTERN.search(code)
    if match:
        return match.group(1)
    return None


def strip_ts_extension(name: str) -> str:
    """'card.component.ts' -> 'card.component'."""
    if name.endswith(".ts"):
        return name[:-3]
    return name


def find_primary_component(files: list[GeneratedFile]) -> ComponentRef:
    """Return the first file typed as a component, or the placeholder."""
    for generated_file in files:
        if generated_file.type != COMPONENT_TYPE:
            continue

        class_name = generated_file.class_name
        if class_name is None:
            class_name = UNKNOWN_COMPONENT_NAME

        selector = extract_selector(generated_file.code)
        if selector is None:
            selector = DEFAULT_SELECTOR

        return ComponentRef(
            class_name=class_name,
            selector=selector,
            import_path=strip_ts_extension(generated_file.name),
        )

    logger.warning("No generated file is typed as a component, using placeholder")
    return PLACEHOLDER_COMPONENT


def add_file_import(code: str, component: ComponentRef) -> str:
    """Insert the import statement before the first decorator tag."""
    return code.replace(
        DECORATOR_TAG,
        f"{component.import_statement}\n\n{DECORATOR_TAG}",
        1,
    )


def add_decorator_import(code: str, component: ComponentRef) -> str:
    """Register the component in the decorator's imports array.

    If no ``imports: [`` exists, a new property is added right after the
    decorator tag. Otherwise the class name is prepended to the first array
    found from the match onwards.
    """
    match = IMPORTS_PATTERN.search(code)

    if match is None:
        return code.replace(
            DECORATOR_TAG,
            f"{DECORATOR_TAG}\n  imports: [{component.class_name}],",
            1,
        )

    bracket_pos = code.find("[", match.start())
    pre, post = split_at_index(bracket_pos + 1, code)
    return f"{pre}{component.class_name},{post}"


def add_template_reference(code: str, component: ComponentRef) -> str:
    """Insert ``<selector />`` after the opening quote of the template."""
    match = TEMPLATE_PATTERN.search(code)
    start = match.start() if match else 0

    for i in range(start, len(code)):
        if code[i] in QUOTE_CHARS:
            pre, post = split_at_index(i + 1, code)
            return f"{pre}<{component.selector} />{post}"

    return code


def patch_entry_file(files: list[GeneratedFile], entry_text: str) -> str:
    """Patch the entry file text so it imports and renders the generated component.

    Args:
        files: Files returned by the generation model
        entry_text: Current contents of the entry file

    Returns:
        The patched entry file text
    """
    component = find_primary_component(files)
    logger.debug(
        f"Patching entry file for {component.class_name} <{component.selector}>"
    )

    code = add_file_import(entry_text, component)
    code = add_decorator_import(code, component)
    code = add_template_reference(code, component)
    return code
