"""Target language profiles.

Each profile turns resolved catalog data into source text. Profiles are plain
values selected once at start-up; the render functions have no side effects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .catalog import Catalog, CommandClassEntry
from .errors import ConfigError
from .naming import IdentifierStyle, to_snake, type_name


BANNER = "Auto-generated from Z-Wave command class XML. Do not edit manually."

INDEX_TYPE_NAME = "CommandClass"


@dataclass(frozen=True)
class Profile:
    name: str
    identifier_style: IdentifierStyle
    index_file_name: str
    command_file_name: Callable[[CommandClassEntry], str]
    render_index: Callable[[Catalog, Optional[str]], str]
    render_commands: Callable[[CommandClassEntry, Optional[str]], str]
    default_namespace: Optional[str] = None


def format_code(code: int) -> str:
    return f"0x{code:02x}"


def command_type_name(entry: CommandClassEntry) -> str:
    return type_name(entry.short_name) + "Command"


def _commands_title(entry: CommandClassEntry) -> str:
    return f"{entry.display_name} commands (version {entry.version})"


def _first_name_per_code(pairs: Sequence[Tuple[str, int]]) -> List[Tuple[str, int]]:
    seen = set()
    unique: List[Tuple[str, int]] = []
    for name, code in pairs:
        if code in seen:
            continue
        seen.add(code)
        unique.append((name, code))
    return unique


def _first_code_per_name(pairs: Sequence[Tuple[str, int]]) -> List[Tuple[str, int]]:
    # Enum constants must be unique in Java and C++.
    seen = set()
    unique: List[Tuple[str, int]] = []
    for name, code in pairs:
        if name in seen:
            continue
        seen.add(name)
        unique.append((name, code))
    return unique


def _index_pairs(catalog: Catalog) -> List[Tuple[str, int]]:
    return [(entry.display_name, entry.code) for entry in catalog]


def _command_pairs(entry: CommandClassEntry) -> List[Tuple[str, int]]:
    return [(command.display_name, command.code) for command in entry.commands]


# JavaScript: frozen object literal with a reverse "properties" map.


def _js_enum(title: str, enum_name: str, pairs: Sequence[Tuple[str, int]]) -> str:
    lines = [f"// {BANNER}", f"/* {title} */", f"let {enum_name} = Object.freeze({{"]
    for name, code in pairs:
        lines.append(f"    {name}: {format_code(code)},")
    lines.append("    properties: {")
    for name, code in pairs:
        lines.append(f'        {format_code(code)}: {{name: "{name}"}},')
    lines.append("    }")
    lines.append("});")
    lines.append(f"exports.{enum_name} = {enum_name};")

    argument = enum_name[0].lower() + enum_name[1:]
    lines.append(f"let is{enum_name}Valid = function({argument}) {{")
    lines.append(f"    return ({enum_name}.properties[{argument}] !== undefined);")
    lines.append("}")
    lines.append(f"exports.is{enum_name}Valid = is{enum_name}Valid;")
    return "\n".join(lines) + "\n"


def render_javascript_index(catalog: Catalog, namespace: Optional[str]) -> str:
    return _js_enum("Z-Wave command classes", INDEX_TYPE_NAME, _index_pairs(catalog))


def render_javascript_commands(entry: CommandClassEntry, namespace: Optional[str]) -> str:
    return _js_enum(_commands_title(entry), command_type_name(entry), _command_pairs(entry))


# Java: closed enum with an int accessor and reverse lookups.


def _java_enum(
    title: str,
    enum_name: str,
    pairs: Sequence[Tuple[str, int]],
    namespace: Optional[str],
) -> str:
    lines = [f"// {BANNER}"]
    if namespace:
        lines.append(f"package {namespace};")
        lines.append("")
    lines.append("import java.util.HashMap;")
    lines.append("")
    lines.append(f"/* {title} */")
    lines.append(f"public enum {enum_name} {{")
    pairs = _first_code_per_name(pairs)
    if pairs:
        members = [f"    {name}({format_code(code)})" for name, code in pairs]
        lines.append(",\n".join(members) + ";")
    else:
        lines.append("    ;")
    lines.append("")
    lines.append(
        f"    private static final HashMap<Integer, {enum_name}> mapping = "
        f"new HashMap<Integer, {enum_name}>();"
    )
    lines.append("    static {")
    lines.append(f"        for ({enum_name} value : values()) {{")
    lines.append("            if (!mapping.containsKey(value.intValue)) {")
    lines.append("                mapping.put(value.intValue, value);")
    lines.append("            }")
    lines.append("        }")
    lines.append("    }")
    lines.append("")
    lines.append("    private final int intValue;")
    lines.append("")
    lines.append(f"    {enum_name}(int intValue) {{")
    lines.append("        this.intValue = intValue;")
    lines.append("    }")
    lines.append("")
    lines.append("    public int getIntValue() {")
    lines.append("        return intValue;")
    lines.append("    }")
    lines.append("")
    lines.append(f"    public static {enum_name} valueOf(int intValue) {{")
    lines.append(f"        {enum_name} result = mapping.get(intValue);")
    lines.append("        if (result == null) {")
    lines.append(
        f'            throw new IllegalArgumentException("Unknown {enum_name} value: " + intValue);'
    )
    lines.append("        }")
    lines.append("        return result;")
    lines.append("    }")
    lines.append("")
    lines.append(f"    public static {enum_name} valueOfOrNull(int intValue) {{")
    lines.append("        return mapping.get(intValue);")
    lines.append("    }")
    lines.append("}")
    return "\n".join(lines) + "\n"


def render_java_index(catalog: Catalog, namespace: Optional[str]) -> str:
    return _java_enum("Z-Wave command classes", INDEX_TYPE_NAME, _index_pairs(catalog), namespace)


def render_java_commands(entry: CommandClassEntry, namespace: Optional[str]) -> str:
    return _java_enum(
        _commands_title(entry), command_type_name(entry), _command_pairs(entry), namespace
    )


# C++: enum class header with string and validity helpers.


def _to_header_guard(file_name: str) -> str:
    guard = file_name.upper()
    for token in ("/", "\\", ".", "-", " ", ":"):
        guard = guard.replace(token, "_")
    return f"GEN_{guard}_INCLUDED"


def _namespace_parts(namespace_value: str) -> List[str]:
    return [part.strip() for part in namespace_value.split("::") if part.strip()]


def _cpp_enum(
    title: str,
    enum_name: str,
    file_name: str,
    pairs: Sequence[Tuple[str, int]],
    namespace: Optional[str],
) -> str:
    guard = _to_header_guard(file_name)
    parts = _namespace_parts(namespace or "")
    pairs = _first_code_per_name(pairs)
    unique = _first_name_per_code(pairs)

    lines = [f"#ifndef {guard}", f"#define {guard}", "", "#include <cstdint>", ""]
    lines.append(f"// {BANNER}")
    lines.extend(f"namespace {part} {{" for part in parts)
    lines.append("")
    lines.append(f"/* {title} */")
    lines.append(f"enum class {enum_name} : std::uint8_t {{")
    for name, code in pairs:
        lines.append(f"    {name} = {format_code(code)},")
    lines.append("};")
    lines.append("")
    lines.append(f"inline const char *ToString({enum_name} value) {{")
    lines.append("    switch (value) {")
    for name, _ in unique:
        lines.append(f'        case {enum_name}::{name}: return "{name}";')
    lines.append("        default: return nullptr;")
    lines.append("    }")
    lines.append("}")
    lines.append("")
    lines.append(f"inline bool Is{enum_name}Valid(std::uint8_t value) {{")
    lines.append("    switch (value) {")
    for _, code in unique:
        lines.append(f"        case {format_code(code)}:")
    if unique:
        lines.append("            return true;")
    lines.append("        default:")
    lines.append("            return false;")
    lines.append("    }")
    lines.append("}")
    lines.append("")
    lines.extend("}" for _ in parts)
    lines.append("")
    lines.append("#endif")
    return "\n".join(lines) + "\n"


CPP_INDEX_FILE_NAME = "command_class.h"


def cpp_command_file_name(entry: CommandClassEntry) -> str:
    return f"{to_snake(entry.short_name)}_command.h"


def render_cpp_index(catalog: Catalog, namespace: Optional[str]) -> str:
    return _cpp_enum(
        "Z-Wave command classes",
        INDEX_TYPE_NAME,
        CPP_INDEX_FILE_NAME,
        _index_pairs(catalog),
        namespace,
    )


def render_cpp_commands(entry: CommandClassEntry, namespace: Optional[str]) -> str:
    return _cpp_enum(
        _commands_title(entry),
        command_type_name(entry),
        cpp_command_file_name(entry),
        _command_pairs(entry),
        namespace,
    )


PROFILES: Dict[str, Profile] = {
    "javascript": Profile(
        name="javascript",
        identifier_style=IdentifierStyle.UPPER_CAMEL,
        index_file_name=f"{INDEX_TYPE_NAME}.js",
        command_file_name=lambda entry: f"{command_type_name(entry)}.js",
        render_index=render_javascript_index,
        render_commands=render_javascript_commands,
    ),
    "java": Profile(
        name="java",
        identifier_style=IdentifierStyle.VERBATIM,
        index_file_name=f"{INDEX_TYPE_NAME}.java",
        command_file_name=lambda entry: f"{command_type_name(entry)}.java",
        render_index=render_java_index,
        render_commands=render_java_commands,
    ),
    "cpp": Profile(
        name="cpp",
        identifier_style=IdentifierStyle.UPPER_CAMEL,
        index_file_name=CPP_INDEX_FILE_NAME,
        command_file_name=cpp_command_file_name,
        render_index=render_cpp_index,
        render_commands=render_cpp_commands,
        default_namespace="zwave",
    ),
}


def get_profile(name: str) -> Profile:
    key = name.strip().lower()
    if key not in PROFILES:
        raise ConfigError(
            "Unsupported profile '{}'. Expected one of: {}".format(
                name,
                ", ".join(sorted(PROFILES)),
            )
        )
    return PROFILES[key]
