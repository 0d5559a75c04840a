"""
Structural scanner for GSX Python override files.

GSX profiles are Python modules, but the converter must never run them. This
module recognizes the bounded subset the override extractor needs (mapping
literals, tuples, calls, decorated functions, if/elif/else chains, returns)
and turns it into a small explicit AST. Everything else is skipped over by
balanced-bracket scanning and surfaces as ``Unknown`` or a generic ``Block``.

Neither the lexer nor the parser raises on malformed input.

Example:
    module = parse_module(text)
    for statement in module.body:
        if isinstance(statement, FunctionDef):
            print(statement.name, [dotted_name(d) for d in statement.decorators])
"""

import math
import re
import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

NAME = 'NAME'
NUMBER = 'NUMBER'
STRING = 'STRING'
OP = 'OP'
NEWLINE = 'NEWLINE'
INDENT = 'INDENT'
DEDENT = 'DEDENT'
ENDMARKER = 'ENDMARKER'

OPEN_BRACKETS = {'(': ')', '[': ']', '{': '}'}
CLOSE_BRACKETS = set(OPEN_BRACKETS.values())

COMPARISON_OPS = {'==', '!=', '<', '>', '<=', '>='}
BINARY_OPS = {'+', '-', '*', '/', '//', '%', '**', '@', '|', '&', '^', '<<', '>>'}
COMPOUND_KEYWORDS = {'for', 'while', 'with', 'try', 'except', 'finally', 'else', 'elif', 'async', 'match', 'case'}
SIMPLE_KEYWORDS = {'import', 'from', 'pass', 'break', 'continue', 'global', 'nonlocal',
                   'del', 'raise', 'assert', 'yield', 'await'}
# only keywords when they open a compound statement
SOFT_KEYWORDS = {'match', 'case'}
DIGITS = '0123456789'

NAME_PATTERN = re.compile(r'[^\W\d]\w*')
NUMBER_PATTERN = re.compile(
    r'0[xX][0-9a-fA-F_]+|0[oO][0-7_]+|0[bB][01_]+'
    r'|(?:\d[\d_]*(?:\.[\d_]*)?|\.\d[\d_]*)(?:[eE][+-]?\d+)?[jJ]?'
)
STRING_PREFIX_PATTERN = re.compile(r'([rRbBuUfF]{0,2})(\'\'\'|"""|\'|")')
OPERATORS = sorted([
    '**=', '//=', '>>=', '<<=', '->', ':=', '==', '!=', '<=', '>=', '**', '//', '<<', '>>',
    '+=', '-=', '*=', '/=', '%=', '&=', '|=', '^=', '@=',
    '(', ')', '[', ']', '{', '}', ':', ',', '.', ';', '@', '=', '+', '-', '*', '/', '%',
    '<', '>', '&', '|', '^', '~', '!',
], key=len, reverse=True)
ESCAPES = {'n': '\n', 't': '\t', 'r': '\r', '\\': '\\', "'": "'", '"': '"', '0': '\0'}


@dataclass
class Token:
    type: str
    value: str
    line: int


# AST nodes

@dataclass
class Node:
    line: int = 0


@dataclass
class Unknown(Node):
    """A construct the scanner does not model; ``text`` is for diagnostics only."""

    text: str = ''


@dataclass
class Name(Node):
    id: str = ''


@dataclass
class Attribute(Node):
    value: Optional[Node] = None
    attr: str = ''


@dataclass
class Number(Node):
    text: str = ''

    @property
    def value(self) -> Optional[float]:
        """Numeric value, or None for malformed or non-finite literals."""
        text = self.text.replace('_', '')
        value = None
        if self.is_integer_literal:
            try:
                value = float(int(text, 0))
            except (ValueError, OverflowError):
                pass
        if value is None:
            try:
                value = float(text)
            except ValueError:
                return None
        return value if math.isfinite(value) else None

    @property
    def is_integer_literal(self) -> bool:
        text = self.text.lstrip('-')
        return not any(c in text for c in '.eEjJ') or text.lower().startswith(('0x', '0o', '0b'))


@dataclass
class String(Node):
    value: str = ''


@dataclass
class Call(Node):
    func: Optional[Node] = None
    args: List[Node] = field(default_factory=list)
    keywords: List[Tuple[str, Node]] = field(default_factory=list)


@dataclass
class TupleLit(Node):
    elements: List[Node] = field(default_factory=list)


@dataclass
class ListLit(Node):
    elements: List[Node] = field(default_factory=list)


@dataclass
class DictLit(Node):
    items: List[Tuple[Node, Node]] = field(default_factory=list)


@dataclass
class Compare(Node):
    left: Optional[Node] = None
    ops: List[str] = field(default_factory=list)
    comparators: List[Node] = field(default_factory=list)


@dataclass
class BoolOp(Node):
    op: str = ''
    values: List[Node] = field(default_factory=list)


@dataclass
class Assign(Node):
    targets: List[Node] = field(default_factory=list)
    value: Optional[Node] = None


@dataclass
class Return(Node):
    value: Optional[Node] = None


@dataclass
class ExprStmt(Node):
    value: Optional[Node] = None


@dataclass
class If(Node):
    """An if/elif/else chain: ``branches`` holds (test, body) pairs in order."""

    branches: List[Tuple[Node, List[Node]]] = field(default_factory=list)
    orelse: List[Node] = field(default_factory=list)


@dataclass
class FunctionDef(Node):
    name: str = ''
    params: List[str] = field(default_factory=list)
    decorators: List[Node] = field(default_factory=list)
    body: List[Node] = field(default_factory=list)


@dataclass
class Block(Node):
    """Any other compound statement (class, for, while, with, try, ...)."""

    keyword: str = ''
    name: str = ''
    body: List[Node] = field(default_factory=list)


@dataclass
class Module(Node):
    body: List[Node] = field(default_factory=list)


def dotted_name(node: Optional[Node]) -> Optional[str]:
    """``a.b.c`` for Name/Attribute chains, None for anything else."""
    if isinstance(node, Name):
        return node.id
    if isinstance(node, Attribute):
        base = dotted_name(node.value)
        return f"{base}.{node.attr}" if base else None
    if isinstance(node, Call):
        return dotted_name(node.func)
    return None


def last_name(node: Optional[Node]) -> Optional[str]:
    """The final identifier of a Name/Attribute chain (``idMajor`` for ``aircraftData.idMajor``)."""
    if isinstance(node, Name):
        return node.id
    if isinstance(node, Attribute):
        return node.attr
    return None


def walk(nodes: List[Node]) -> Iterator[Node]:
    """Yield statements depth-first, descending into function, if and block bodies."""
    for node in nodes:
        yield node
        if isinstance(node, (FunctionDef, Block)):
            yield from walk(node.body)
        elif isinstance(node, If):
            for _, body in node.branches:
                yield from walk(body)
            yield from walk(node.orelse)


def _decode_string(body: str, raw: bool) -> str:
    if raw or '\\' not in body:
        return body
    out = []
    i = 0
    while i < len(body):
        c = body[i]
        if c == '\\' and i + 1 < len(body):
            nxt = body[i + 1]
            if nxt == '\n':
                i += 2
                continue
            out.append(ESCAPES.get(nxt, '\\' + nxt))
            i += 2
        else:
            out.append(c)
            i += 1
    return ''.join(out)


def tokenize(text: str) -> List[Token]:
    """
    Split Python-like source into tokens, including indentation tokens.

    Comments are dropped. Line breaks inside brackets do not produce NEWLINE
    tokens. Characters that start no token are skipped.
    """
    tokens: List[Token] = []
    indents = [0]
    depth = 0
    line = 1
    pos = 0
    at_line_start = True
    length = len(text)

    while pos < length:
        if at_line_start and depth == 0:
            # measure indentation of the next logical line
            width = 0
            start = pos
            while pos < length and text[pos] in ' \t\f':
                width = (width // 8 + 1) * 8 if text[pos] == '\t' else width + 1
                pos += 1
            if pos >= length:
                break
            if text[pos] in '#\r\n':
                # blank or comment-only line
                while pos < length and text[pos] != '\n':
                    pos += 1
                pos += 1
                line += 1
                continue
            at_line_start = False
            if width > indents[-1]:
                indents.append(width)
                tokens.append(Token(INDENT, text[start:pos], line))
            else:
                while width < indents[-1]:
                    indents.pop()
                    tokens.append(Token(DEDENT, '', line))
                if width != indents[-1]:
                    logger.debug(f"Inconsistent dedent at line {line}")
                    indents.append(width)
                    tokens.append(Token(INDENT, text[start:pos], line))

        c = text[pos]

        if c == '\n':
            if depth == 0:
                tokens.append(Token(NEWLINE, '\n', line))
                at_line_start = True
            pos += 1
            line += 1
            continue
        if c in ' \t\f\r':
            pos += 1
            continue
        if c == '#':
            while pos < length and text[pos] != '\n':
                pos += 1
            continue
        if c == '\\' and text.startswith('\n', pos + 1):
            pos += 2
            line += 1
            continue

        match = STRING_PREFIX_PATTERN.match(text, pos)
        if match:
            prefix, quote = match.group(1), match.group(2)
            body_start = match.end()
            end = body_start
            while end < length:
                if text[end] == '\\':
                    end += 2
                    continue
                if text.startswith(quote, end):
                    break
                if len(quote) == 1 and text[end] == '\n':
                    break
                end += 1
            body = text[body_start:min(end, length)]
            tokens.append(Token(STRING, _decode_string(body, 'r' in prefix.lower()), line))
            line += body.count('\n')
            pos = min(end + len(quote), length) if text.startswith(quote, end) else end
            continue

        match = NAME_PATTERN.match(text, pos)
        if match:
            tokens.append(Token(NAME, match.group(), line))
            pos = match.end()
            continue

        if c in DIGITS or (c == '.' and pos + 1 < length and text[pos + 1] in DIGITS):
            match = NUMBER_PATTERN.match(text, pos)
            tokens.append(Token(NUMBER, match.group(), line))
            pos = match.end()
            continue

        for op in OPERATORS:
            if text.startswith(op, pos):
                if op in OPEN_BRACKETS:
                    depth += 1
                elif op in CLOSE_BRACKETS:
                    depth = max(0, depth - 1)
                tokens.append(Token(OP, op, line))
                pos += len(op)
                break
        else:
            logger.debug(f"Skipping unexpected character {c!r} at line {line}")
            pos += 1

    if tokens and tokens[-1].type not in (NEWLINE, DEDENT):
        tokens.append(Token(NEWLINE, '', line))
    while len(indents) > 1:
        indents.pop()
        tokens.append(Token(DEDENT, '', line))
    tokens.append(Token(ENDMARKER, '', line))
    return tokens


class Parser:
    """
    Recursive-descent parser over the token stream.

    Every parse method consumes at least what it recognizes and returns a
    node; unrecognized spans are consumed (balancing brackets) and returned
    as Unknown so the caller can continue with the next statement.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    # token helpers

    @property
    def current(self) -> Token:
        return self.tokens[min(self.pos, len(self.tokens) - 1)]

    def peek(self, offset: int = 1) -> Token:
        return self.tokens[min(self.pos + offset, len(self.tokens) - 1)]

    def advance(self) -> Token:
        token = self.current
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return token

    def at(self, type_: str, value: Optional[str] = None) -> bool:
        token = self.current
        return token.type == type_ and (value is None or token.value == value)

    def at_op(self, *values: str) -> bool:
        return self.current.type == OP and self.current.value in values

    def at_keyword(self, *values: str) -> bool:
        return self.current.type == NAME and self.current.value in values

    def accept(self, type_: str, value: Optional[str] = None) -> Optional[Token]:
        if self.at(type_, value):
            return self.advance()
        return None

    def at_end(self) -> bool:
        return self.current.type == ENDMARKER

    def skip_balanced(self) -> str:
        """Consume an opening bracket through its matching close; returns the skipped text."""
        parts = []
        depth = 0
        while not self.at_end():
            token = self.advance()
            parts.append(token.value)
            if token.type == OP and token.value in OPEN_BRACKETS:
                depth += 1
            elif token.type == OP and token.value in CLOSE_BRACKETS:
                depth -= 1
                if depth <= 0:
                    break
        return ' '.join(parts)

    def skip_to_line_end(self) -> str:
        """Consume the rest of a logical line, including the NEWLINE."""
        parts = []
        while not self.at_end() and not self.at(NEWLINE):
            if self.at(INDENT) or self.at(DEDENT):
                break
            if self.at_op(*OPEN_BRACKETS):
                parts.append(self.skip_balanced())
            else:
                parts.append(self.advance().value)
        self.accept(NEWLINE)
        return ' '.join(parts)

    # statements

    def parse_module(self) -> Module:
        return Module(line=1, body=self.parse_statements(top_level=True))

    def parse_statements(self, top_level: bool = False) -> List[Node]:
        statements: List[Node] = []
        while not self.at_end():
            if self.at(DEDENT):
                if not top_level:
                    break
                self.advance()
                continue
            if self.accept(NEWLINE) or self.accept(INDENT):
                continue
            start = self.pos
            statements.extend(self.parse_statement())
            if self.pos == start:
                self.advance()
        return statements

    def parse_statement(self) -> List[Node]:
        token = self.current
        if token.type == OP and token.value == '@':
            return [self.parse_decorated()]
        if token.type == NAME:
            if token.value == 'def':
                return [self.parse_function([])]
            if token.value == 'async' and self.peek().value == 'def':
                self.advance()
                return [self.parse_function([])]
            if token.value == 'if':
                return [self.parse_if()]
            if token.value == 'class':
                return [self.parse_block()]
            if token.value in COMPOUND_KEYWORDS and self._header_has_colon():
                return [self.parse_block()]
        return self.parse_simple_statements()

    def _header_has_colon(self) -> bool:
        """True when the current line is a compound statement header (ends its header with ':')."""
        offset = 0
        depth = 0
        while True:
            token = self.peek(offset)
            if token.type in (NEWLINE, ENDMARKER):
                return False
            if token.type == OP:
                if token.value in OPEN_BRACKETS:
                    depth += 1
                elif token.value in CLOSE_BRACKETS:
                    depth -= 1
                elif token.value == ':' and depth == 0:
                    return True
            offset += 1

    def parse_decorated(self) -> Node:
        decorators = []
        while self.accept(OP, '@'):
            decorators.append(self.parse_expression())
            self.skip_to_line_end()
        if self.at_keyword('def'):
            return self.parse_function(decorators)
        if self.at_keyword('async') and self.peek().value == 'def':
            self.advance()
            return self.parse_function(decorators)
        if self.at_keyword('class'):
            return self.parse_block()
        return Unknown(line=self.current.line, text='@decorator')

    def parse_function(self, decorators: List[Node]) -> FunctionDef:
        line = self.advance().line  # 'def'
        name = self.current.value if self.at(NAME) else ''
        self.accept(NAME)
        params = self._parse_params() if self.at_op('(') else []
        self._skip_header()
        return FunctionDef(line=line, name=name, params=params, decorators=decorators,
                           body=self.parse_suite())

    def _parse_params(self) -> List[str]:
        params = []
        depth = 0
        expect_name = True
        while not self.at_end():
            token = self.advance()
            if token.type == OP and token.value in OPEN_BRACKETS:
                depth += 1
                if depth == 1:
                    expect_name = True
                continue
            if token.type == OP and token.value in CLOSE_BRACKETS:
                depth -= 1
                if depth <= 0:
                    break
                continue
            if depth != 1:
                continue
            if token.type == OP and token.value == ',':
                expect_name = True
            elif token.type == OP and token.value in ('*', '**', '/'):
                continue
            elif token.type == NAME and expect_name:
                params.append(token.value)
                expect_name = False
            else:
                expect_name = False
        return params

    def _skip_header(self) -> None:
        """Skip to the ':' ending a compound statement header."""
        depth = 0
        while not self.at_end() and not self.at(NEWLINE):
            token = self.advance()
            if token.type == OP:
                if token.value in OPEN_BRACKETS:
                    depth += 1
                elif token.value in CLOSE_BRACKETS:
                    depth -= 1
                elif token.value == ':' and depth <= 0:
                    return

    def parse_suite(self) -> List[Node]:
        if self.accept(NEWLINE):
            while self.accept(NEWLINE):
                pass
            if not self.accept(INDENT):
                return []
            body = self.parse_statements()
            self.accept(DEDENT)
            return body
        # one-line suite: "if x: return y"
        return self.parse_simple_statements()

    def parse_if(self) -> If:
        node = If(line=self.current.line)
        self.advance()  # 'if'
        test = self.parse_expression()
        self._skip_header()
        node.branches.append((test, self.parse_suite()))
        while self.at_keyword('elif'):
            self.advance()
            test = self.parse_expression()
            self._skip_header()
            node.branches.append((test, self.parse_suite()))
        if self.at_keyword('else') and self.peek().type == OP and self.peek().value == ':':
            self.advance()
            self._skip_header()
            node.orelse = self.parse_suite()
        return node

    def parse_block(self) -> Block:
        token = self.advance()
        name = self.current.value if token.value == 'class' and self.at(NAME) else ''
        self._skip_header()
        return Block(line=token.line, keyword=token.value, name=name, body=self.parse_suite())

    def parse_simple_statements(self) -> List[Node]:
        statements = []
        while True:
            statements.append(self.parse_simple_statement())
            if not self.accept(OP, ';'):
                break
            if self.at(NEWLINE):
                break
        if not self.accept(NEWLINE):
            rest = self.skip_to_line_end()
            if rest:
                logger.debug(f"Skipped trailing text at line {self.current.line}: {rest}")
        return statements

    def parse_simple_statement(self) -> Node:
        token = self.current
        if token.type == NAME and token.value == 'return':
            self.advance()
            if self.at(NEWLINE) or self.at_op(';') or self.at_end():
                return Return(line=token.line)
            return Return(line=token.line, value=self.parse_expression_list())
        if token.type == NAME and (token.value in SIMPLE_KEYWORDS
                                   or token.value in COMPOUND_KEYWORDS - SOFT_KEYWORDS):
            return Unknown(line=token.line, text=self._skip_statement())

        expression = self.parse_expression_list()
        if self.at_op('='):
            targets = [expression]
            value = None
            while self.accept(OP, '='):
                value = self.parse_expression_list()
                targets.append(value)
            return Assign(line=token.line, targets=targets[:-1], value=value)
        if self.at_op(':'):
            # annotated assignment: name: type = value
            self.advance()
            self.parse_expression()
            if self.accept(OP, '='):
                return Assign(line=token.line, targets=[expression], value=self.parse_expression_list())
            return ExprStmt(line=token.line, value=expression)
        if self.current.type == OP and self.current.value.endswith('=') and self.current.value not in COMPARISON_OPS:
            self.advance()
            self.parse_expression_list()
            return Unknown(line=token.line, text='augmented assignment')
        return ExprStmt(line=token.line, value=expression)

    def _skip_statement(self) -> str:
        parts = []
        while not self.at_end() and not self.at(NEWLINE) and not self.at_op(';'):
            if self.at(INDENT) or self.at(DEDENT):
                break
            if self.at_op(*OPEN_BRACKETS):
                parts.append(self.skip_balanced())
            else:
                parts.append(self.advance().value)
        return ' '.join(parts)

    # expressions

    def parse_expression_list(self) -> Node:
        """Expressions separated by commas; more than one becomes a bare tuple."""
        line = self.current.line
        first = self.parse_expression()
        if not self.at_op(','):
            return first
        elements = [first]
        while self.accept(OP, ','):
            if self._at_expression_end():
                break
            elements.append(self.parse_expression())
        return TupleLit(line=line, elements=elements)

    def _at_expression_end(self) -> bool:
        token = self.current
        if token.type in (NEWLINE, ENDMARKER, INDENT, DEDENT):
            return True
        return token.type == OP and (token.value in CLOSE_BRACKETS or token.value in ('=', ':', ';', ','))

    def parse_expression(self) -> Node:
        line = self.current.line
        if self.at_keyword('lambda'):
            return Unknown(line=line, text=self._skip_lambda())
        node = self.parse_or()
        if self.at_keyword('if'):
            # conditional expression
            self.advance()
            self.parse_or()
            if self.accept(NAME, 'else'):
                self.parse_expression()
            return Unknown(line=line, text='conditional expression')
        if self.at_op(':='):
            self.advance()
            return self.parse_expression()
        return node

    def _skip_lambda(self) -> str:
        parts = []
        depth = 0
        while not self.at_end() and not self.at(NEWLINE):
            token = self.current
            if token.type == OP:
                if token.value in OPEN_BRACKETS:
                    depth += 1
                elif token.value in CLOSE_BRACKETS:
                    if depth == 0:
                        break
                    depth -= 1
                elif token.value == ',' and depth == 0:
                    break
            parts.append(self.advance().value)
        return ' '.join(parts)

    def parse_or(self) -> Node:
        return self._parse_bool('or', self.parse_and)

    def parse_and(self) -> Node:
        return self._parse_bool('and', self.parse_not)

    def _parse_bool(self, op: str, operand) -> Node:
        line = self.current.line
        node = operand()
        if not self.at_keyword(op):
            return node
        values = [node]
        while self.accept(NAME, op):
            values.append(operand())
        return BoolOp(line=line, op=op, values=values)

    def parse_not(self) -> Node:
        if self.at_keyword('not'):
            line = self.advance().line
            self.parse_not()
            return Unknown(line=line, text='not')
        return self.parse_comparison()

    def parse_comparison(self) -> Node:
        line = self.current.line
        left = self.parse_arithmetic()
        ops = []
        comparators = []
        while True:
            if self.at_op(*COMPARISON_OPS):
                ops.append(self.advance().value)
            elif self.at_keyword('in'):
                self.advance()
                ops.append('in')
            elif self.at_keyword('not') and self.peek().value == 'in':
                self.advance()
                self.advance()
                ops.append('not in')
            elif self.at_keyword('is'):
                self.advance()
                ops.append('is not' if self.accept(NAME, 'not') else 'is')
            else:
                break
            comparators.append(self.parse_arithmetic())
        if not ops:
            return left
        return Compare(line=line, left=left, ops=ops, comparators=comparators)

    def parse_arithmetic(self) -> Node:
        line = self.current.line
        node = self.parse_unary()
        if not self.at_op(*BINARY_OPS):
            return node
        while self.at_op(*BINARY_OPS):
            self.advance()
            self.parse_unary()
        return Unknown(line=line, text='arithmetic')

    def parse_unary(self) -> Node:
        if self.at_op('-', '+', '~'):
            token = self.advance()
            operand = self.parse_unary()
            if isinstance(operand, Number) and token.value != '~':
                text = operand.text
                if token.value == '-':
                    text = text[1:] if text.startswith('-') else '-' + text
                return Number(line=token.line, text=text)
            return Unknown(line=token.line, text=f'unary {token.value}')
        if self.at_keyword('await'):
            self.advance()
        return self.parse_postfix()

    def parse_postfix(self) -> Node:
        node = self.parse_atom()
        while True:
            if self.at_op('.') and self.peek().type == NAME:
                self.advance()
                node = Attribute(line=node.line, value=node, attr=self.advance().value)
            elif self.at_op('('):
                node = self.parse_call(node)
            elif self.at_op('['):
                text = self.skip_balanced()
                node = Unknown(line=node.line, text=f'subscript {text}')
            else:
                return node

    def parse_call(self, func: Node) -> Call:
        call = Call(line=func.line, func=func)
        self.advance()  # '('
        while not self.at_end() and not self.at_op(')'):
            if self.at_op('*', '**'):
                self.advance()
                self.parse_expression()
            elif self.at(NAME) and self.peek().type == OP and self.peek().value == '=':
                keyword = self.advance().value
                self.advance()
                call.keywords.append((keyword, self.parse_expression()))
            else:
                argument = self.parse_expression()
                if self.at_keyword('for', 'async'):
                    self._skip_to_close()
                    argument = Unknown(line=argument.line, text='generator expression')
                call.args.append(argument)
            if not self.accept(OP, ','):
                if not self.at_op(')'):
                    self._skip_to_close()
                break
        self.accept(OP, ')')
        return call

    def _skip_to_close(self) -> None:
        """Skip tokens up to (not including) the bracket closing the current group."""
        depth = 0
        while not self.at_end():
            token = self.current
            if token.type == OP and token.value in OPEN_BRACKETS:
                depth += 1
            elif token.type == OP and token.value in CLOSE_BRACKETS:
                if depth == 0:
                    return
                depth -= 1
            self.advance()

    def parse_atom(self) -> Node:
        token = self.current
        if token.type == NAME:
            self.advance()
            return Name(line=token.line, id=token.value)
        if token.type == NUMBER:
            self.advance()
            return Number(line=token.line, text=token.value)
        if token.type == STRING:
            parts = []
            while self.at(STRING):
                parts.append(self.advance().value)
            return String(line=token.line, value=''.join(parts))
        if token.type == OP and token.value == '(':
            return self.parse_parenthesized()
        if token.type == OP and token.value == '[':
            return self.parse_list()
        if token.type == OP and token.value == '{':
            return self.parse_braces()
        if token.type == OP and token.value not in CLOSE_BRACKETS and token.value not in (',', ':', '=', ';'):
            self.advance()
        return Unknown(line=token.line, text=token.value)

    def _parse_elements(self, closing: str) -> Tuple[List[Node], bool, bool]:
        """
        Parse comma-separated elements up to ``closing``.

        Returns:
            (elements, saw_comma, is_comprehension)
        """
        elements = []
        saw_comma = False
        self.advance()  # opening bracket
        while not self.at_end() and not self.at_op(closing):
            if self.at_op('*'):
                self.advance()
            element = self.parse_expression()
            if self.at_keyword('for', 'async'):
                self._skip_to_close()
                self.accept(OP, closing)
                return [element], False, True
            elements.append(element)
            if self.accept(OP, ','):
                saw_comma = True
            elif not self.at_op(closing):
                self._skip_to_close()
                break
        self.accept(OP, closing)
        return elements, saw_comma, False

    def parse_parenthesized(self) -> Node:
        line = self.current.line
        elements, saw_comma, comprehension = self._parse_elements(')')
        if comprehension:
            return Unknown(line=line, text='generator expression')
        if len(elements) == 1 and not saw_comma:
            return elements[0]
        return TupleLit(line=line, elements=elements)

    def parse_list(self) -> Node:
        line = self.current.line
        elements, _, comprehension = self._parse_elements(']')
        if comprehension:
            return Unknown(line=line, text='list comprehension')
        return ListLit(line=line, elements=elements)

    def parse_braces(self) -> Node:
        """Dict literal; sets and comprehensions degrade to Unknown."""
        node = DictLit(line=self.current.line)
        self.advance()  # '{'
        while not self.at_end() and not self.at_op('}'):
            if self.at_op('**'):
                self.advance()
                self.parse_expression()
            else:
                key = self.parse_expression()
                if not self.accept(OP, ':'):
                    self._skip_to_close()
                    self.accept(OP, '}')
                    return Unknown(line=node.line, text='set or comprehension')
                value = self.parse_expression()
                if self.at_keyword('for', 'async'):
                    self._skip_to_close()
                    self.accept(OP, '}')
                    return Unknown(line=node.line, text='dict comprehension')
                node.items.append((key, value))
            if not self.accept(OP, ','):
                if not self.at_op('}'):
                    self._skip_to_close()
                break
        self.accept(OP, '}')
        return node


def parse_module(text: str) -> Module:
    """
    Parse Python-like source into a Module without executing anything.

    Args:
        text: Source text

    Returns:
        Module whose body holds the recognized top-level statements
    """
    return Parser(tokenize(text)).parse_module()
