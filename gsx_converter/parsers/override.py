"""
Override extractor for GSX Python profiles (``.py`` / ``.override``).

Two constructs are recovered from the scanned module:

- the grouped parking mapping (``parkings = {GATE_A: {1: (...), ...}}``),
  which names gates, assigns display labels and groupings, and points gates
  at custom stop-distance functions;
- the ``@AlternativeStopPositions`` functions themselves, whose lookup
  tables and ``if major == ...`` chains become per-aircraft stop tables.

The file is never executed; see ``pyscan`` for the recognized subset.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..merger import merge_gate
from ..models import (
    DEFAULT_KEY,
    Configuration,
    Gate,
    GateGroup,
    ScalarStop,
    StopPositionsEntry,
    VariantStop,
)
from .base import ConfigParser
from .pyscan import (
    Assign,
    BoolOp,
    Call,
    Compare,
    DictLit,
    FunctionDef,
    If,
    ListLit,
    Module,
    Name,
    Node,
    Number,
    Return,
    String,
    TupleLit,
    dotted_name,
    last_name,
    parse_module,
    walk,
)

logger = logging.getLogger(__name__)

STOP_FUNCTION_MARKER = 'AlternativeStopPositions'
PARKINGS_NAME = 'parkings'
DISPLAY_SEPARATOR = '|'
CONSTANT_NAMES = {'None', 'True', 'False'}

LookupTable = Dict[str, float]


@dataclass
class TableLookup:
    """``table.get(<major|minor>, fallback)`` found in a return statement."""

    table: str
    key: str  # 'major' or 'minor'
    fallback: Optional[float]


def _number(node: Optional[Node]) -> Optional[float]:
    return node.value if isinstance(node, Number) else None


def _integer_key(node: Node) -> Optional[str]:
    """Normalize a table or mapping key (``737``, ``"737"``) to its integer text."""
    if isinstance(node, Number):
        value = node.value
    elif isinstance(node, String) and node.value.strip().lstrip('-').isdigit():
        value = float(node.value.strip())
    else:
        return None
    if value is None or not value.is_integer():
        return None
    return str(int(value))


def _aircraft_field(node: Optional[Node]) -> Optional[str]:
    """'major' or 'minor' when the expression names an aircraft id field."""
    name = last_name(node)
    if name is None:
        return None
    lowered = name.lower()
    if 'major' in lowered:
        return 'major'
    if 'minor' in lowered:
        return 'minor'
    return None


def _format_distance(value: float) -> str:
    return str(int(value)) if value.is_integer() else repr(value)


def split_display_name(text: str) -> Tuple[Optional[str], str]:
    """
    Split ``"Group|Label"`` on the first separator.

    Returns:
        (group, label); group is None when the text has no separator
    """
    if DISPLAY_SEPARATOR in text:
        group, label = text.split(DISPLAY_SEPARATOR, 1)
        return group.strip(), label.strip()
    return None, text.strip()


def _display_name_call(node: Node) -> Optional[str]:
    """The string passed to a naming call such as ``CustomizedName("A|1")``."""
    if isinstance(node, Call) and node.args and isinstance(node.args[0], String):
        return node.args[0].value
    return None


def lookup_table(node: Node) -> Optional[LookupTable]:
    """Numeric entries of a dict literal keyed by integers; None when there are none."""
    if not isinstance(node, DictLit):
        return None
    table: LookupTable = {}
    for key_node, value_node in node.items:
        key = _integer_key(key_node)
        value = _number(value_node)
        if key is not None and value is not None:
            table[key] = value
    return table or None


class StopFunction:
    """
    One ``@AlternativeStopPositions`` function and the stop table it encodes.

    Args:
        node: Parsed function definition
        module_tables: Lookup tables assigned at module level, used when the
            function refers to a table it does not define itself
    """

    def __init__(self, node: FunctionDef, module_tables: Optional[Dict[str, LookupTable]] = None):
        self.node = node
        self.name = node.name
        self.tables: Dict[str, LookupTable] = dict(module_tables or {})
        for statement in walk(node.body):
            if isinstance(statement, Assign):
                table = lookup_table(statement.value)
                if table is None:
                    continue
                for target in statement.targets:
                    if isinstance(target, Name):
                        self.tables[target.id] = table

    def _return_value(self, body: List[Node]):
        """First return of a branch, reduced to a distance or a table lookup."""
        for statement in body:
            if isinstance(statement, Return):
                return self._reduce(statement.value)
        return None

    def _reduce(self, node: Optional[Node]):
        # unwrap converters such as Distance.fromMeters(...)
        while isinstance(node, Call) and not self._is_table_get(node) and len(node.args) == 1:
            node = node.args[0]
        value = _number(node)
        if value is not None:
            return value
        if isinstance(node, Call) and self._is_table_get(node):
            key = _aircraft_field(node.args[0]) if node.args else None
            fallback = _number(node.args[1]) if len(node.args) > 1 else None
            if key is not None:
                return TableLookup(table=last_name(node.func.value), key=key, fallback=fallback)
        return None

    @staticmethod
    def _is_table_get(node: Call) -> bool:
        func = node.func
        return (dotted_name(func) is not None and last_name(func) == 'get'
                and isinstance(getattr(func, 'value', None), Name))

    def _major_ids(self, test: Node) -> List[str]:
        """Major ids selected by a branch test; empty when the test is about something else."""
        if isinstance(test, BoolOp) and test.op == 'or':
            ids = []
            for value in test.values:
                ids.extend(i for i in self._major_ids(value) if i not in ids)
            return ids
        if not isinstance(test, Compare) or len(test.ops) != 1:
            return []
        left, op, right = test.left, test.ops[0], test.comparators[0]
        if op == '==':
            if _aircraft_field(left) == 'major':
                key = _integer_key(right)
            elif _aircraft_field(right) == 'major':
                key = _integer_key(left)
            else:
                key = None
            return [key] if key is not None else []
        if op == 'in' and _aircraft_field(left) == 'major' and isinstance(right, (TupleLit, ListLit)):
            return [k for k in (_integer_key(e) for e in right.elements) if k is not None]
        return []

    def _expand(self, result: Dict[str, StopPositionsEntry], lookup: TableLookup) -> None:
        """Expand a major-keyed table into scalars for majors not yet populated."""
        table = self.tables.get(lookup.table)
        if table is None:
            logger.debug(f"{self.name}: unknown lookup table '{lookup.table}'")
            return
        for major, distance in table.items():
            if major not in result:
                result[major] = ScalarStop(distance)
        if lookup.fallback is not None and DEFAULT_KEY not in result:
            result[DEFAULT_KEY] = ScalarStop(lookup.fallback)

    def _apply_fallthrough(self, result: Dict[str, StopPositionsEntry], value) -> None:
        if isinstance(value, TableLookup) and value.key == 'major':
            self._expand(result, value)
        elif isinstance(value, float) and DEFAULT_KEY not in result:
            result[DEFAULT_KEY] = ScalarStop(value)

    def _apply_branch(self, result: Dict[str, StopPositionsEntry], majors: List[str], value) -> None:
        for major in majors:
            if major in result:
                continue
            if isinstance(value, float):
                result[major] = ScalarStop(value)
            elif isinstance(value, TableLookup) and value.key == 'minor':
                table = self.tables.get(value.table)
                if table is None:
                    logger.debug(f"{self.name}: unknown lookup table '{value.table}'")
                    continue
                result[major] = VariantStop(variants=dict(table), default=value.fallback)

    def stop_table(self) -> Dict[str, StopPositionsEntry]:
        """
        Build the per-aircraft stop table.

        Branches testing a major id produce entries for that id (a variant
        table when they look up the minor id, a scalar when they return a
        number). Else branches and trailing returns that look up the major id
        expand that table for every major not already present, plus a
        ``default`` entry from the lookup fallback. A lone numeric return is
        the ``default`` distance.

        Returns:
            Stop table keyed by major id, ``default`` last
        """
        result: Dict[str, StopPositionsEntry] = {}
        for statement in self.node.body:
            if isinstance(statement, If):
                for test, body in statement.branches:
                    majors = self._major_ids(test)
                    if majors:
                        self._apply_branch(result, majors, self._return_value(body))
                    else:
                        logger.debug(f"{self.name}: ignoring branch at line {test.line}")
                if statement.orelse:
                    self._apply_fallthrough(result, self._return_value(statement.orelse))
            elif isinstance(statement, Return):
                self._apply_fallthrough(result, self._reduce(statement.value))
                break

        if DEFAULT_KEY in result:
            result[DEFAULT_KEY] = result.pop(DEFAULT_KEY)
        return result

    def direct_distance(self) -> Optional[float]:
        """The first plain numeric distance returned anywhere in the function."""
        for statement in walk(self.node.body):
            if isinstance(statement, Return):
                value = self._reduce(statement.value)
                if isinstance(value, float):
                    return value
        return None


class OverrideConfigParser(ConfigParser):
    """
    Parser for GSX Python override profiles.

    Example:
        config = OverrideConfigParser().parse('''
            parkings = {
                GATE_A: {
                    1: (CustomizedName("Terminal 1|Gate 1"),),
                },
            }
        ''')
        config.gates[0].gate_id  # 'a 1'
    """

    def get_supported_extensions(self) -> List[str]:
        return ['.py', '.override']

    def parse(self, text: str, airport: str = '') -> Configuration:
        config = Configuration(airport=airport)
        module = parse_module(text)

        display_names = self.display_name_bindings(module)
        stop_functions = self.stop_functions(module)

        parkings = self.find_parkings(module)
        if parkings is None:
            logger.debug("No parking mapping found in override")
            return config

        groups: Dict[str, GateGroup] = {}
        for group_key, group_node in parkings.items:
            group_name = self._group_name(group_key)
            if group_name is None or not isinstance(group_node, DictLit):
                continue
            group_code = group_name.split('_')[-1] if '_' in group_name else group_name

            for number_node, entry in group_node.items:
                number = _integer_key(number_node)
                if number is None:
                    logger.debug(f"Skipping non-numeric parking key in group {group_name}")
                    continue
                gate = self.parse_parking_entry(f"{group_code.lower()} {number}", group_code,
                                                entry, display_names, stop_functions)
                existing = config.find_gate(gate.gate_id)
                if existing is not None:
                    merge_gate(existing, gate)
                else:
                    config.gates.append(gate)

                grouping = gate.properties.get('group_name')
                if grouping:
                    group = groups.setdefault(grouping.casefold(), GateGroup(id=grouping))
                    group.add_member(gate.gate_id)

        config.gate_groups = sorted(groups.values(), key=lambda g: g.id.casefold())
        logger.debug(f"Parsed {len(config.gates)} gates and {len(config.gate_groups)} groups from override")
        return config

    @staticmethod
    def _group_name(node: Node) -> Optional[str]:
        if isinstance(node, String):
            return node.value
        return last_name(node)

    def parse_parking_entry(self, gate_id: str, group_code: str, entry: Node,
                            display_names: Dict[str, str],
                            stop_functions: Dict[str, StopFunction]) -> Gate:
        """
        Build a gate from one ``<number>: (<tuple>)`` entry.

        Args:
            gate_id: Synthesized gate identifier
            group_code: Last underscore token of the group name
            entry: The tuple (or single value) assigned to the parking number
            display_names: Top-level ``<name> = CustomizedName("...")`` bindings
            stop_functions: Stop functions by name

        Returns:
            Gate with label, grouping and stop table when present
        """
        gate = Gate(gate_id=gate_id)
        gate.properties['group_code'] = group_code

        elements = entry.elements if isinstance(entry, (TupleLit, ListLit)) else [entry]
        display_name = None
        stop_function = None
        for element in elements:
            text = _display_name_call(element)
            if text is None and isinstance(element, Name) and element.id not in CONSTANT_NAMES:
                text = display_names.get(element.id)
                if text is None:
                    # a bare name that is not a label is a stop function reference;
                    # a defined function wins over an earlier unresolved name
                    if stop_function is None or (element.id in stop_functions
                                                 and stop_function not in stop_functions):
                        stop_function = element.id
                    continue
            if text is not None and display_name is None:
                display_name = text

        if display_name is not None:
            grouping, label = split_display_name(display_name)
            if grouping:
                gate.properties['group_name'] = grouping
            gate.ui_name = label

        if stop_function is not None:
            gate.properties['custom_stop_function'] = stop_function
            function = stop_functions.get(stop_function)
            if function is None:
                logger.debug(f"Gate {gate_id}: stop function '{stop_function}' is not defined in the file")
            else:
                table = function.stop_table()
                if table:
                    gate.aircraft_stop_positions = table
                distance = function.direct_distance()
                if distance is not None:
                    gate.properties['default_stop_distance_m'] = _format_distance(distance)
        return gate

    @staticmethod
    def display_name_bindings(module: Module) -> Dict[str, str]:
        """Top-level ``<name> = <call>("Group|Label")`` assignments."""
        bindings = {}
        for statement in module.body:
            if not isinstance(statement, Assign):
                continue
            text = _display_name_call(statement.value)
            if text is None:
                continue
            for target in statement.targets:
                if isinstance(target, Name):
                    bindings[target.id] = text
        return bindings

    @staticmethod
    def module_tables(module: Module) -> Dict[str, LookupTable]:
        tables = {}
        for statement in module.body:
            if isinstance(statement, Assign):
                table = lookup_table(statement.value)
                if table is None:
                    continue
                for target in statement.targets:
                    if isinstance(target, Name):
                        tables[target.id] = table
        return tables

    def stop_functions(self, module: Module) -> Dict[str, StopFunction]:
        """Every function decorated with the stop-position marker, by name."""
        tables = self.module_tables(module)
        functions = {}
        for statement in walk(module.body):
            if not isinstance(statement, FunctionDef):
                continue
            if any(last_name(d.func if isinstance(d, Call) else d) == STOP_FUNCTION_MARKER
                   for d in statement.decorators):
                functions[statement.name] = StopFunction(statement, tables)
        return functions

    @staticmethod
    def find_parkings(module: Module) -> Optional[DictLit]:
        """
        Locate the parking mapping.

        A top-level ``parkings = {...}`` wins; otherwise the first top-level
        mapping whose values are themselves mappings.
        """
        candidate = None
        for statement in module.body:
            if not isinstance(statement, Assign) or not isinstance(statement.value, DictLit):
                continue
            names = [t.id.lower() for t in statement.targets if isinstance(t, Name)]
            if PARKINGS_NAME in names:
                return statement.value
            if candidate is None and any(isinstance(v, DictLit) for _, v in statement.value.items):
                candidate = statement.value
        return candidate
