"""ECMAScript parser. Recursive descent, one method per grammar production.

Produces ESTree dict nodes with start/end offsets. Class bodies, member
access, identifiers, primary expressions and unary expressions are reached
through self.hooks so that extensions can take over those productions.
"""

from __future__ import annotations

from typing import Callable

from .ast import ASTNode, finish_node, is_type, make_node
from .errors import ParseError, UnexpectedToken, error_at
from .hooks import GrammarHooks
from .options import (
    ARROWS_VERSION,
    ASYNC_GENERATOR_VERSION,
    ASYNC_VERSION,
    CLASSES_VERSION,
    Options,
)
from .tokens import (
    KEYWORDS,
    RESERVED_WORDS,
    TK_EOF,
    TK_KEYWORD,
    TK_NAME,
    TK_NUM,
    TK_PUNCT,
    TK_STRING,
    Token,
    tokenize,
)

# Wraps the hooks built so far and returns the new outermost hooks.
Extension = Callable[["Parser", GrammarHooks], GrammarHooks]

ASSIGN_OPS: set[str] = {
    "=",
    "+=",
    "-=",
    "*=",
    "/=",
    "%=",
    "**=",
    "<<=",
    ">>=",
    ">>>=",
    "&=",
    "|=",
    "^=",
}

BINARY_PRECEDENCE: dict[str, int] = {
    "||": 1,
    "&&": 2,
    "|": 3,
    "^": 4,
    "&": 5,
    "==": 6,
    "!=": 6,
    "===": 6,
    "!==": 6,
    "<": 7,
    ">": 7,
    "<=": 7,
    ">=": 7,
    "instanceof": 7,
    "in": 7,
    "<<": 8,
    ">>": 8,
    ">>>": 8,
    "+": 9,
    "-": 9,
    "*": 10,
    "/": 10,
    "%": 10,
    "**": 11,
}

LOGICAL_OPS: set[str] = {"||", "&&"}

PREFIX_OPS: set[str] = {"!", "~", "+", "-", "++", "--"}

PREFIX_KEYWORDS: set[str] = {"typeof", "void", "delete"}


class Parser:
    """Recursive descent parser for ECMAScript."""

    def __init__(
        self,
        source: str,
        options: Options | None = None,
        extensions: tuple[Extension, ...] = (),
    ):
        self.source: str = source
        self.options: Options = options if options is not None else Options()
        hooks = GrammarHooks(self)
        for extension in extensions:
            hooks = extension(self, hooks)
        self.hooks: GrammarHooks = hooks
        self.tokens: list[Token] = tokenize(source, hooks.token_readers())
        self.pos: int = 0
        self.last_end: int = 0
        self.function_depth: int = 0
        self.loop_depth: int = 0
        self.class_depth: int = 0

    # ── Helpers ──────────────────────────────────────────────

    def current(self) -> Token:
        return self.tokens[self.pos]

    def peek(self, offset: int) -> Token:
        idx = self.pos + offset
        if idx >= len(self.tokens):
            return self.tokens[len(self.tokens) - 1]
        return self.tokens[idx]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.last_end = tok.end
        if tok.type != TK_EOF:
            self.pos += 1
        return tok

    def at(self, value: str) -> bool:
        """Check for a punctuator or keyword, never a string or name."""
        tok = self.current()
        return tok.value == value and (tok.type == TK_PUNCT or tok.type == TK_KEYWORD)

    def at_type(self, type_: str) -> bool:
        return self.current().type == type_

    def eat(self, value: str) -> bool:
        if self.at(value):
            self.advance()
            return True
        return False

    def expect(self, value: str) -> Token:
        if not self.at(value):
            raise self.unexpected()
        return self.advance()

    def is_contextual(self, name: str) -> bool:
        tok = self.current()
        return tok.type == TK_NAME and tok.value == name and not tok.escaped

    def can_insert_semicolon(self) -> bool:
        tok = self.current()
        return tok.type == TK_EOF or self.at("}") or tok.nl_before

    def semicolon(self) -> None:
        if not self.eat(";") and not self.can_insert_semicolon():
            raise self.unexpected()

    def error_at(self, kind: type[ParseError], pos: int, msg: str = "") -> ParseError:
        return error_at(self.source, kind, pos, msg)

    def error(self, msg: str) -> ParseError:
        return self.error_at(ParseError, self.current().start, msg)

    def unexpected(self, tok: Token | None = None) -> ParseError:
        if tok is None:
            tok = self.current()
        return self.error_at(UnexpectedToken, tok.start)

    def start_node(self) -> ASTNode:
        return make_node("", self.current().start)

    def finish_node(self, node: ASTNode, type_name: str) -> ASTNode:
        return finish_node(node, type_name, self.last_end)

    def check_unreserved(self, node: ASTNode) -> None:
        name = node["name"]
        if name in KEYWORDS:
            raise self.error_at(ParseError, node["start"], "Unexpected keyword '" + name + "'")
        if name in RESERVED_WORDS:
            raise self.error_at(ParseError, node["start"], "The keyword '" + name + "' is reserved")

    def check_lval(self, expr: ASTNode) -> None:
        if not is_type(expr, ["Identifier", "MemberExpression"]):
            raise self.error_at(ParseError, expr["start"], "Assigning to rvalue")

    # ── Top Level ────────────────────────────────────────────

    def parse_program(self) -> ASTNode:
        node = make_node("Program", 0)
        body: list[ASTNode] = []
        while not self.at_type(TK_EOF):
            body.append(self.parse_statement())
        node["body"] = body
        node["sourceType"] = self.options.source_type
        return finish_node(node, "Program", len(self.source))

    # ── Statements ───────────────────────────────────────────

    def parse_statement(self) -> ASTNode:
        tok = self.current()
        if tok.type == TK_PUNCT:
            if tok.value == "{":
                return self.parse_block()
            if tok.value == ";":
                node = self.start_node()
                self.advance()
                return self.finish_node(node, "EmptyStatement")
        if tok.type == TK_KEYWORD:
            if tok.value == "var" or tok.value == "const":
                return self.parse_var_statement(tok.value)
            if tok.value == "function":
                return self.parse_function(self.start_node(), True, False)
            if tok.value == "class":
                return self.hooks.parse_class(self.start_node(), True)
            if tok.value == "if":
                return self.parse_if_statement()
            if tok.value == "while":
                return self.parse_while_statement()
            if tok.value == "for":
                return self.parse_for_statement()
            if tok.value == "return":
                return self.parse_return_statement()
            if tok.value == "throw":
                return self.parse_throw_statement()
            if tok.value == "try":
                return self.parse_try_statement()
            if tok.value == "break" or tok.value == "continue":
                return self.parse_break_continue(tok.value)
        if self._at_let_declaration():
            return self.parse_var_statement("let")
        if self._at_async_function():
            node = self.start_node()
            self.advance()
            return self.parse_function(node, True, True)
        return self.parse_expression_statement()

    def _at_let_declaration(self) -> bool:
        if self.options.ecma_version < 6 or not self.is_contextual("let"):
            return False
        return self.peek(1).type == TK_NAME

    def _at_async_function(self) -> bool:
        if self.options.ecma_version < ASYNC_VERSION or not self.is_contextual("async"):
            return False
        nxt = self.peek(1)
        return nxt.type == TK_KEYWORD and nxt.value == "function" and not nxt.nl_before

    def parse_block(self) -> ASTNode:
        node = self.start_node()
        self.expect("{")
        body: list[ASTNode] = []
        while not self.eat("}"):
            body.append(self.parse_statement())
        node["body"] = body
        return self.finish_node(node, "BlockStatement")

    def parse_var_statement(self, kind: str) -> ASTNode:
        node = self.start_node()
        self.advance()
        self.parse_var(node, kind, False)
        self.semicolon()
        return self.finish_node(node, "VariableDeclaration")

    def parse_var(self, node: ASTNode, kind: str, no_in: bool) -> ASTNode:
        declarations: list[ASTNode] = []
        while True:
            decl = self.start_node()
            decl["id"] = self.parse_ident(False)
            decl["init"] = self.parse_maybe_assign(no_in) if self.eat("=") else None
            declarations.append(self.finish_node(decl, "VariableDeclarator"))
            if not self.eat(","):
                break
        node["declarations"] = declarations
        node["kind"] = kind
        return node

    def parse_if_statement(self) -> ASTNode:
        node = self.start_node()
        self.expect("if")
        node["test"] = self.parse_paren_expression()
        node["consequent"] = self.parse_statement()
        node["alternate"] = self.parse_statement() if self.eat("else") else None
        return self.finish_node(node, "IfStatement")

    def parse_while_statement(self) -> ASTNode:
        node = self.start_node()
        self.expect("while")
        node["test"] = self.parse_paren_expression()
        node["body"] = self.parse_loop_body()
        return self.finish_node(node, "WhileStatement")

    def parse_loop_body(self) -> ASTNode:
        self.loop_depth += 1
        try:
            return self.parse_statement()
        finally:
            self.loop_depth -= 1

    def parse_for_statement(self) -> ASTNode:
        """for (init; test; update) body, for (x in obj) body, for (x of it) body."""
        node = self.start_node()
        self.expect("for")
        self.expect("(")
        init: ASTNode | None = None
        if self.at(";"):
            return self.parse_for(node, None)
        if self.at("var") or self.at("const") or self._at_let_declaration():
            kind = self.current().value
            init = self.start_node()
            self.advance()
            self.parse_var(init, kind, True)
            self.finish_node(init, "VariableDeclaration")
            declarations = init["declarations"]
            if len(declarations) == 1 and declarations[0]["init"] is None and self._at_for_in_of():
                return self.parse_for_in(node, init)
            return self.parse_for(node, init)
        init = self.parse_expression(True)
        if self._at_for_in_of():
            self.check_lval(init)
            return self.parse_for_in(node, init)
        return self.parse_for(node, init)

    def _at_for_in_of(self) -> bool:
        return self.at("in") or (self.options.ecma_version >= 6 and self.is_contextual("of"))

    def parse_for(self, node: ASTNode, init: ASTNode | None) -> ASTNode:
        node["init"] = init
        self.expect(";")
        node["test"] = None if self.at(";") else self.parse_expression()
        self.expect(";")
        node["update"] = None if self.at(")") else self.parse_expression()
        self.expect(")")
        node["body"] = self.parse_loop_body()
        return self.finish_node(node, "ForStatement")

    def parse_for_in(self, node: ASTNode, left: ASTNode) -> ASTNode:
        type_name = "ForInStatement" if self.at("in") else "ForOfStatement"
        self.advance()
        node["left"] = left
        node["right"] = self.parse_expression() if type_name == "ForInStatement" else self.parse_maybe_assign()
        self.expect(")")
        node["body"] = self.parse_loop_body()
        return self.finish_node(node, type_name)

    def parse_return_statement(self) -> ASTNode:
        if self.function_depth == 0:
            raise self.error("'return' outside of function")
        node = self.start_node()
        self.expect("return")
        if self.eat(";") or self.can_insert_semicolon():
            node["argument"] = None
        else:
            node["argument"] = self.parse_expression()
            self.semicolon()
        return self.finish_node(node, "ReturnStatement")

    def parse_throw_statement(self) -> ASTNode:
        node = self.start_node()
        self.expect("throw")
        if self.current().nl_before:
            raise self.error_at(ParseError, self.last_end, "Illegal newline after throw")
        node["argument"] = self.parse_expression()
        self.semicolon()
        return self.finish_node(node, "ThrowStatement")

    def parse_try_statement(self) -> ASTNode:
        node = self.start_node()
        self.expect("try")
        node["block"] = self.parse_block()
        node["handler"] = None
        if self.at("catch"):
            clause = self.start_node()
            self.advance()
            self.expect("(")
            clause["param"] = self.parse_ident(False)
            self.expect(")")
            clause["body"] = self.parse_block()
            node["handler"] = self.finish_node(clause, "CatchClause")
        node["finalizer"] = self.parse_block() if self.eat("finally") else None
        if node["handler"] is None and node["finalizer"] is None:
            raise self.error_at(ParseError, node["start"], "Missing catch or finally clause")
        return self.finish_node(node, "TryStatement")

    def parse_break_continue(self, keyword: str) -> ASTNode:
        node = self.start_node()
        self.advance()
        if self.loop_depth == 0:
            raise self.error_at(ParseError, node["start"], "Unsyntactic " + keyword)
        node["label"] = None
        self.semicolon()
        return self.finish_node(node, "BreakStatement" if keyword == "break" else "ContinueStatement")

    def parse_expression_statement(self) -> ASTNode:
        node = self.start_node()
        node["expression"] = self.parse_expression()
        self.semicolon()
        return self.finish_node(node, "ExpressionStatement")

    def parse_paren_expression(self) -> ASTNode:
        self.expect("(")
        expr = self.parse_expression()
        self.expect(")")
        return expr

    # ── Functions ────────────────────────────────────────────

    def parse_function(self, node: ASTNode, is_statement: bool, is_async: bool) -> ASTNode:
        self.expect("function")
        is_generator = self.options.ecma_version >= 6 and self.eat("*")
        if is_statement or self.at_type(TK_NAME):
            node["id"] = self.parse_ident(False)
        else:
            node["id"] = None
        node["expression"] = False
        node["generator"] = is_generator
        node["async"] = is_async
        node["params"] = self.parse_params()
        node["body"] = self.parse_function_body()
        return self.finish_node(node, "FunctionDeclaration" if is_statement else "FunctionExpression")

    def parse_method(self, is_generator: bool, is_async: bool) -> ASTNode:
        """The FunctionExpression of a method, starting at its '('."""
        node = self.start_node()
        node["id"] = None
        node["expression"] = False
        node["generator"] = is_generator
        node["async"] = is_async
        node["params"] = self.parse_params()
        node["body"] = self.parse_function_body()
        return self.finish_node(node, "FunctionExpression")

    def parse_params(self) -> list[ASTNode]:
        self.expect("(")
        params: list[ASTNode] = []
        while not self.eat(")"):
            if params:
                self.expect(",")
                if self.eat(")"):
                    break
            params.append(self.parse_binding_element())
        return params

    def parse_binding_element(self) -> ASTNode:
        """Param = '...' Ident | Ident ( '=' AssignExpr )?"""
        start = self.current().start
        if self.options.ecma_version >= 6 and self.eat("..."):
            node = make_node("RestElement", start)
            node["argument"] = self.parse_ident(False)
            if not self.at(")"):
                raise self.unexpected()
            return self.finish_node(node, "RestElement")
        ident = self.parse_ident(False)
        if self.options.ecma_version >= 6 and self.eat("="):
            node = make_node("AssignmentPattern", start)
            node["left"] = ident
            node["right"] = self.parse_maybe_assign()
            return self.finish_node(node, "AssignmentPattern")
        return ident

    def parse_function_body(self) -> ASTNode:
        self.function_depth += 1
        saved_loop_depth = self.loop_depth
        self.loop_depth = 0
        try:
            return self.parse_block()
        finally:
            self.function_depth -= 1
            self.loop_depth = saved_loop_depth

    def _is_arrow_params(self) -> bool:
        """Lookahead scan: check if '(' begins arrow params by finding matching ')' then '=>'."""
        depth = 1
        i = self.pos + 1
        num_tokens = len(self.tokens)
        while i < num_tokens:
            tok = self.tokens[i]
            if tok.type == TK_EOF:
                return False
            if tok.type == TK_PUNCT:
                if tok.value == "(" or tok.value == "[" or tok.value == "{":
                    depth += 1
                elif tok.value == ")" or tok.value == "]" or tok.value == "}":
                    depth -= 1
                    if depth == 0:
                        nxt = self.tokens[i + 1]
                        return nxt.type == TK_PUNCT and nxt.value == "=>" and not nxt.nl_before
            i += 1
        return False

    def parse_arrow(self, no_in: bool) -> ASTNode:
        """Arrow = ( Ident | '(' Params ')' ) '=>' ( Block | AssignExpr )"""
        node = self.start_node()
        if self.at_type(TK_NAME):
            params = [self.parse_ident(False)]
        else:
            params = self.parse_params()
        self.expect("=>")
        node["id"] = None
        node["generator"] = False
        node["async"] = False
        node["params"] = params
        if self.at("{"):
            node["expression"] = False
            node["body"] = self.parse_function_body()
        else:
            node["expression"] = True
            self.function_depth += 1
            try:
                node["body"] = self.parse_maybe_assign(no_in)
            finally:
                self.function_depth -= 1
        return self.finish_node(node, "ArrowFunctionExpression")

    # ── Classes ──────────────────────────────────────────────

    def default_parse_class(self, node: ASTNode, is_statement: bool) -> ASTNode:
        if self.options.ecma_version < CLASSES_VERSION:
            raise self.unexpected()
        self.expect("class")
        if self.at_type(TK_NAME):
            node["id"] = self.parse_ident(False)
        elif is_statement:
            raise self.unexpected()
        else:
            node["id"] = None
        node["superClass"] = self.parse_expr_subscripts() if self.eat("extends") else None
        body = self.start_node()
        members: list[ASTNode] = []
        had_constructor = False
        self.expect("{")
        self.class_depth += 1
        try:
            while not self.eat("}"):
                member = self.hooks.parse_class_element()
                if member is None:
                    continue
                members.append(member)
                if is_type(member, ["MethodDefinition"]) and member["kind"] == "constructor":
                    if had_constructor:
                        raise self.error_at(
                            ParseError, member["start"], "Duplicate constructor in the same class"
                        )
                    had_constructor = True
        finally:
            self.class_depth -= 1
        body["body"] = members
        node["body"] = self.finish_node(body, "ClassBody")
        return self.finish_node(node, "ClassDeclaration" if is_statement else "ClassExpression")

    def _try_contextual(self, method: ASTNode, word: str, no_line_break: bool = False) -> bool:
        """Consume a member modifier. If it turns out to be the member name, set the key instead."""
        tok = self.current()
        if not self.is_contextual(word):
            return False
        self.advance()
        if not self.at("(") and (not no_line_break or not self.can_insert_semicolon()):
            return True
        if "key" in method:
            raise self.unexpected(tok)
        method["computed"] = False
        key = make_node("Identifier", tok.start, {"name": word})
        method["key"] = finish_node(key, "Identifier", tok.end)
        return False

    def default_parse_class_element(self) -> ASTNode | None:
        if self.eat(";"):
            return None
        method = self.start_node()
        method["kind"] = "method"
        method["static"] = self._try_contextual(method, "static")
        is_generator = self.eat("*")
        is_async = False
        if not is_generator:
            if self.options.ecma_version >= ASYNC_VERSION and self._try_contextual(method, "async", True):
                is_async = True
                is_generator = self.options.ecma_version >= ASYNC_GENERATOR_VERSION and self.eat("*")
            elif self._try_contextual(method, "get"):
                method["kind"] = "get"
            elif self._try_contextual(method, "set"):
                method["kind"] = "set"
        if "key" not in method:
            self.parse_property_name(method)
        key = method["key"]
        is_constructor = (is_type(key, ["Identifier"]) and key["name"] == "constructor") or (
            is_type(key, ["Literal"]) and key["value"] == "constructor"
        )
        if not method["computed"] and not method["static"] and is_constructor:
            if method["kind"] != "method":
                raise self.error_at(ParseError, key["start"], "Constructor can't have get/set modifier")
            if is_generator:
                raise self.error_at(ParseError, key["start"], "Constructor can't be a generator")
            if is_async:
                raise self.error_at(ParseError, key["start"], "Constructor can't be an async method")
            method["kind"] = "constructor"
        elif method["static"] and is_type(key, ["Identifier"]) and key["name"] == "prototype":
            raise self.error_at(
                ParseError, key["start"], "Classes may not have a static property named prototype"
            )
        return self.hooks.parse_class_method(method, is_generator, is_async)

    def default_parse_class_method(
        self, method: ASTNode, is_generator: bool, is_async: bool
    ) -> ASTNode:
        value = self.parse_method(is_generator, is_async)
        method["value"] = value
        params = value["params"]
        if method["kind"] == "get" and len(params) != 0:
            raise self.error_at(ParseError, value["start"], "getter should have no params")
        if method["kind"] == "set" and len(params) != 1:
            raise self.error_at(ParseError, value["start"], "setter should have exactly one param")
        return self.finish_node(method, "MethodDefinition")

    def parse_property_name(self, node: ASTNode) -> ASTNode:
        """Set node's key and computed from a property name or '[' expr ']'."""
        if self.options.ecma_version >= 6 and self.eat("["):
            node["computed"] = True
            node["key"] = self.parse_maybe_assign()
            self.expect("]")
            return node["key"]
        node["computed"] = False
        if self.at_type(TK_NUM) or self.at_type(TK_STRING):
            node["key"] = self.parse_expr_atom()
        else:
            node["key"] = self.parse_ident(self.options.allow_reserved != "never")
        return node["key"]

    # ── Expressions ──────────────────────────────────────────

    def parse_expression(self, no_in: bool = False) -> ASTNode:
        """Expression = AssignExpr ( ',' AssignExpr )*"""
        start = self.current().start
        expr = self.parse_maybe_assign(no_in)
        if not self.at(","):
            return expr
        expressions: list[ASTNode] = [expr]
        while self.eat(","):
            expressions.append(self.parse_maybe_assign(no_in))
        node = make_node("SequenceExpression", start, {"expressions": expressions})
        return self.finish_node(node, "SequenceExpression")

    def parse_maybe_assign(self, no_in: bool = False) -> ASTNode:
        """AssignExpr = Arrow | Conditional ( AssignOp AssignExpr )?"""
        if self.options.ecma_version >= ARROWS_VERSION:
            nxt = self.peek(1)
            if self.at_type(TK_NAME) and nxt.type == TK_PUNCT and nxt.value == "=>" and not nxt.nl_before:
                return self.parse_arrow(no_in)
            if self.at("(") and self._is_arrow_params():
                return self.parse_arrow(no_in)
        start = self.current().start
        left = self.parse_maybe_conditional(no_in)
        tok = self.current()
        if tok.type == TK_PUNCT and tok.value in ASSIGN_OPS:
            self.check_lval(left)
            self.advance()
            node = make_node("AssignmentExpression", start, {"operator": tok.value, "left": left})
            node["right"] = self.parse_maybe_assign(no_in)
            return self.finish_node(node, "AssignmentExpression")
        return left

    def parse_maybe_conditional(self, no_in: bool) -> ASTNode:
        """Conditional = BinaryExpr ( '?' AssignExpr ':' AssignExpr )?"""
        start = self.current().start
        expr = self.parse_expr_ops(no_in)
        if not self.eat("?"):
            return expr
        node = make_node("ConditionalExpression", start, {"test": expr})
        node["consequent"] = self.parse_maybe_assign()
        self.expect(":")
        node["alternate"] = self.parse_maybe_assign(no_in)
        return self.finish_node(node, "ConditionalExpression")

    def parse_expr_ops(self, no_in: bool) -> ASTNode:
        start = self.current().start
        expr = self.parse_maybe_unary()
        return self.parse_expr_op(expr, start, -1, no_in)

    def _binary_precedence(self, tok: Token, no_in: bool) -> int:
        """Precedence of a binary operator token, -1 if it is not one."""
        if tok.type == TK_KEYWORD:
            if tok.value == "instanceof" or (tok.value == "in" and not no_in):
                return BINARY_PRECEDENCE[tok.value]
            return -1
        if tok.type != TK_PUNCT or tok.value not in BINARY_PRECEDENCE:
            return -1
        if tok.value == "**" and self.options.ecma_version < 7:
            return -1
        return BINARY_PRECEDENCE[tok.value]

    def parse_expr_op(self, left: ASTNode, left_start: int, min_prec: int, no_in: bool) -> ASTNode:
        """Precedence climbing over BINARY_PRECEDENCE. '**' is right-associative."""
        tok = self.current()
        prec = self._binary_precedence(tok, no_in)
        if prec <= min_prec:
            return left
        op = tok.value
        self.advance()
        right_start = self.current().start
        right_prec = prec - 1 if op == "**" else prec
        right = self.parse_expr_op(self.parse_maybe_unary(), right_start, right_prec, no_in)
        type_name = "LogicalExpression" if op in LOGICAL_OPS else "BinaryExpression"
        node = make_node(type_name, left_start, {"left": left, "operator": op, "right": right})
        self.finish_node(node, type_name)
        return self.parse_expr_op(node, left_start, min_prec, no_in)

    def parse_maybe_unary(self) -> ASTNode:
        """Unary = PrefixOp Unary | Postfix ( '++' | '--' )*"""
        tok = self.current()
        is_prefix = (tok.type == TK_PUNCT and tok.value in PREFIX_OPS) or (
            tok.type == TK_KEYWORD and tok.value in PREFIX_KEYWORDS
        )
        if is_prefix:
            node = self.start_node()
            self.advance()
            node["operator"] = tok.value
            node["prefix"] = True
            node["argument"] = self.parse_maybe_unary()
            if tok.value == "++" or tok.value == "--":
                self.check_lval(node["argument"])
                expr = self.finish_node(node, "UpdateExpression")
            else:
                expr = self.finish_node(node, "UnaryExpression")
        else:
            start = tok.start
            expr = self.parse_expr_subscripts()
            while (self.at("++") or self.at("--")) and not self.current().nl_before:
                self.check_lval(expr)
                op = self.advance().value
                node = make_node("UpdateExpression", start, {"operator": op, "prefix": False})
                node["argument"] = expr
                expr = self.finish_node(node, "UpdateExpression")
        return self.hooks.after_unary(expr)

    def parse_expr_subscripts(self) -> ASTNode:
        start = self.current().start
        return self.parse_subscripts(self.parse_expr_atom(), start, False)

    def parse_subscripts(self, base: ASTNode, start: int, no_calls: bool) -> ASTNode:
        """Suffix = '.' Name | '[' Expr ']' | '(' Args ')'"""
        while True:
            if self.eat("."):
                node = make_node("MemberExpression", start, {"object": base})
                node["property"] = self.hooks.parse_dot_property()
                node["computed"] = False
                base = self.finish_node(node, "MemberExpression")
            elif self.eat("["):
                node = make_node("MemberExpression", start, {"object": base})
                node["property"] = self.parse_expression()
                node["computed"] = True
                self.expect("]")
                base = self.finish_node(node, "MemberExpression")
            elif not no_calls and self.at("("):
                node = make_node("CallExpression", start, {"callee": base})
                node["arguments"] = self.parse_call_args()
                base = self.finish_node(node, "CallExpression")
            else:
                return base

    def parse_call_args(self) -> list[ASTNode]:
        self.expect("(")
        args: list[ASTNode] = []
        while not self.eat(")"):
            if args:
                self.expect(",")
                if self.eat(")"):
                    break
            args.append(self.parse_maybe_assign())
        return args

    def parse_expr_atom(self) -> ASTNode:
        return self.hooks.after_expr_atom(self.default_parse_expr_atom())

    def default_parse_expr_atom(self) -> ASTNode:
        """Parse a primary expression."""
        tok = self.current()

        if tok.type == TK_NAME:
            if self._at_async_function():
                node = self.start_node()
                self.advance()
                return self.parse_function(node, False, True)
            return self.parse_ident(False)

        if tok.type == TK_NUM or tok.type == TK_STRING:
            node = self.start_node()
            self.advance()
            value = parse_number_value(tok.value) if tok.type == TK_NUM else tok.value
            node["value"] = value
            node["raw"] = self.source[tok.start : tok.end]
            return self.finish_node(node, "Literal")

        if tok.type == TK_KEYWORD:
            if tok.value == "this":
                node = self.start_node()
                self.advance()
                return self.finish_node(node, "ThisExpression")
            if tok.value == "super":
                return self.parse_super()
            if tok.value == "null" or tok.value == "true" or tok.value == "false":
                node = self.start_node()
                self.advance()
                node["value"] = None if tok.value == "null" else tok.value == "true"
                node["raw"] = tok.value
                return self.finish_node(node, "Literal")
            if tok.value == "function":
                return self.parse_function(self.start_node(), False, False)
            if tok.value == "class":
                return self.hooks.parse_class(self.start_node(), False)
            if tok.value == "new":
                return self.parse_new()

        if tok.type == TK_PUNCT:
            if tok.value == "(":
                return self.parse_paren_expression()
            if tok.value == "[":
                return self.parse_array()
            if tok.value == "{":
                return self.parse_object()

        raise self.unexpected()

    def parse_super(self) -> ASTNode:
        node = self.start_node()
        if self.function_depth == 0 and self.class_depth == 0:
            raise self.error("'super' keyword outside a method")
        self.advance()
        if not (self.at("(") or self.at(".") or self.at("[")):
            raise self.unexpected()
        return self.finish_node(node, "Super")

    def parse_new(self) -> ASTNode:
        node = self.start_node()
        self.expect("new")
        start = self.current().start
        node["callee"] = self.parse_subscripts(self.parse_expr_atom(), start, True)
        node["arguments"] = self.parse_call_args() if self.at("(") else []
        return self.finish_node(node, "NewExpression")

    def parse_array(self) -> ASTNode:
        node = self.start_node()
        self.expect("[")
        elements: list[ASTNode | None] = []
        while not self.eat("]"):
            if self.at(","):
                self.advance()
                elements.append(None)
                continue
            elements.append(self.parse_maybe_assign())
            if not self.at("]"):
                self.expect(",")
        node["elements"] = elements
        return self.finish_node(node, "ArrayExpression")

    def parse_object(self) -> ASTNode:
        node = self.start_node()
        self.expect("{")
        properties: list[ASTNode] = []
        while not self.eat("}"):
            if properties:
                self.expect(",")
                if self.eat("}"):
                    break
            properties.append(self.parse_property())
        node["properties"] = properties
        return self.finish_node(node, "ObjectExpression")

    def parse_property(self) -> ASTNode:
        """Property = Key ':' AssignExpr | Key Method | ('get'|'set') Key Method | Ident"""
        prop = self.start_node()
        prop["method"] = False
        prop["shorthand"] = False
        prop["kind"] = "init"
        is_generator = self.options.ecma_version >= 6 and self.eat("*")
        for accessor in ("get", "set"):
            if is_generator or not self.is_contextual(accessor):
                continue
            nxt = self.peek(1)
            if nxt.type == TK_PUNCT and nxt.value in (",", "}", ":", "("):
                continue
            self.advance()
            prop["kind"] = accessor
            break
        key = self.parse_property_name(prop)
        if prop["kind"] != "init" or is_generator or self.at("("):
            if prop["kind"] == "init":
                prop["method"] = True
            value = self.parse_method(is_generator, False)
            if prop["kind"] == "get" and len(value["params"]) != 0:
                raise self.error_at(ParseError, value["start"], "getter should have no params")
            if prop["kind"] == "set" and len(value["params"]) != 1:
                raise self.error_at(ParseError, value["start"], "setter should have exactly one param")
            prop["value"] = value
        elif self.eat(":"):
            prop["value"] = self.parse_maybe_assign()
        elif (
            self.options.ecma_version >= 6
            and not prop["computed"]
            and is_type(key, ["Identifier"])
        ):
            if key["name"] in KEYWORDS:
                raise self.error_at(ParseError, key["start"], "Unexpected keyword '" + key["name"] + "'")
            prop["shorthand"] = True
            prop["value"] = key
        else:
            raise self.unexpected()
        return self.finish_node(prop, "Property")

    def parse_ident(self, liberal: bool) -> ASTNode:
        """Identifier. liberal allows keywords, as in property names."""
        tok = self.current()
        if tok.type == TK_KEYWORD and not liberal:
            raise self.unexpected()
        if tok.type != TK_NAME and tok.type != TK_KEYWORD:
            raise self.unexpected()
        if tok.escaped and tok.value in KEYWORDS and not liberal:
            raise self.error_at(ParseError, tok.start, "Escape sequence in keyword " + tok.value)
        node = self.start_node()
        node["name"] = tok.value
        self.advance()
        self.finish_node(node, "Identifier")
        if liberal:
            if self.options.allow_reserved == "never":
                self.check_unreserved(node)
        elif self.options.allow_reserved is not True and tok.value in RESERVED_WORDS:
            raise self.error_at(ParseError, tok.start, "The keyword '" + tok.value + "' is reserved")
        return self.hooks.after_ident(node)


def parse_number_value(raw: str) -> int | float:
    """Parse a numeric literal to its value."""
    prefix = raw[:2].lower()
    if prefix == "0x":
        return int(raw[2:], 16)
    if prefix == "0o":
        return int(raw[2:], 8)
    if prefix == "0b":
        return int(raw[2:], 2)
    if "." in raw or "e" in raw or "E" in raw:
        return float(raw)
    return int(raw)


def parse(
    source: str, options: Options | None = None, extensions: tuple[Extension, ...] = ()
) -> ASTNode:
    """Parse ECMAScript source to a dict-based ESTree Program."""
    parser = Parser(source, options, extensions)
    return parser.parse_program()
