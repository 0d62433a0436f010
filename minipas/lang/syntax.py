"""Recursive-descent parser for the minipas language. Builds one immutable AST (see tree.py) for a whole program.

The grammar, one Parser method per rule:

```
program               := PROGRAM variable SEMI block DOT
block                 := declarations compound_statement
declarations          := (VAR (var_decl SEMI)+ | procedure_decl)*
procedure_decl        := PROCEDURE ID (LPAREN formal_parameter_list RPAREN)? SEMI block SEMI
var_decl              := ID (COMMA ID)* COLON type_spec
formal_parameters     := ID (COMMA ID)* COLON type_spec
formal_parameter_list := (formal_parameters (SEMI formal_parameters)*)?
type_spec             := INTEGER | REAL
compound_statement    := BEGIN statement_list END
statement_list        := statement (SEMI statement)*
statement             := compound_statement | assignment_statement | empty
assignment_statement  := variable ASSIGN expr
expr                  := term ((PLUS | MINUS) term)*
term                  := factor ((MUL | INTEGER_DIV | REAL_DIV) factor)*
factor                := (PLUS | MINUS) factor | INTEGER_CONST | REAL_CONST | LPAREN expr RPAREN | variable
variable              := ID
```

Tokens are consumed strictly left to right with no backtracking. The first grammar violation aborts the parse with
UnexpectedToken; there is no error recovery.
"""

from minipas.lang.error import UnexpectedToken
from minipas.lang.lexical import Lexer, TokenType
from minipas.lang.tree import (Assign, BinaryOp, Block, Compound, IntegerLiteral, NoOp, Param, ProcedureDecl,
                               Program, RealLiteral, UnaryOp, VarDecl, VarRef)


class Parser:
    """Pulls tokens from a Lexer on demand, one token of lookahead."""
    ADDITIVE = (TokenType.PLUS, TokenType.MINUS)
    MULTIPLICATIVE = (TokenType.MUL, TokenType.INTEGER_DIV, TokenType.REAL_DIV)
    TYPES = (TokenType.INTEGER, TokenType.REAL)

    def __init__(self, lexer):
        self.lexer = lexer
        self.current_token = self.lexer.get_next_token()

    @classmethod
    def from_source(cls, text):
        """Returns a Parser reading text."""
        return cls(Lexer(text))

    def eat(self, token_type):
        """Consumes the current token if its kind is token_type (its value is ignored) and returns it. Raises
        UnexpectedToken otherwise.
        """
        token = self.current_token
        if token.type is not token_type:
            raise UnexpectedToken(token)
        self.current_token = self.lexer.get_next_token()
        return token

    def program(self):
        self.eat(TokenType.PROGRAM)
        name = self.variable().id
        self.eat(TokenType.SEMI)
        block = self.block()
        self.eat(TokenType.DOT)
        return Program(name, block)

    def block(self):
        declarations = self.declarations()
        compound = self.compound_statement()
        return Block(declarations, compound)

    def declarations(self):
        """Returns a tuple of VarDecls and ProcedureDecls in source order. Sections may repeat and interleave."""
        declarations = []

        while self.current_token.type in (TokenType.VAR, TokenType.PROCEDURE):
            if self.current_token.type is TokenType.VAR:
                self.eat(TokenType.VAR)
                declarations.extend(self.var_decl())
                self.eat(TokenType.SEMI)
                while self.current_token.type is TokenType.ID:
                    declarations.extend(self.var_decl())
                    self.eat(TokenType.SEMI)
            else:
                declarations.append(self.procedure_decl())

        return tuple(declarations)

    def procedure_decl(self):
        self.eat(TokenType.PROCEDURE)
        token = self.eat(TokenType.ID)

        params = ()
        if self.current_token.type is TokenType.LPAREN:
            self.eat(TokenType.LPAREN)
            params = self.formal_parameter_list()
            self.eat(TokenType.RPAREN)

        self.eat(TokenType.SEMI)
        block = self.block()
        self.eat(TokenType.SEMI)
        return ProcedureDecl(token.value, params, block, token)

    def id_list(self):
        """ID (COMMA ID)*, shared by var_decl and formal_parameters. Returns the ID tokens."""
        tokens = [self.eat(TokenType.ID)]
        while self.current_token.type is TokenType.COMMA:
            self.eat(TokenType.COMMA)
            tokens.append(self.eat(TokenType.ID))
        return tokens

    def var_decl(self):
        """Returns one VarDecl per declared name."""
        tokens = self.id_list()
        self.eat(TokenType.COLON)
        type_spec = self.type_spec()
        return [VarDecl(token.value, type_spec, token) for token in tokens]

    def formal_parameters(self):
        tokens = self.id_list()
        self.eat(TokenType.COLON)
        type_spec = self.type_spec()
        return [Param(token.value, type_spec, token) for token in tokens]

    def formal_parameter_list(self):
        if self.current_token.type is not TokenType.ID:
            return ()

        params = self.formal_parameters()
        while self.current_token.type is TokenType.SEMI:
            self.eat(TokenType.SEMI)
            params.extend(self.formal_parameters())
        return tuple(params)

    def type_spec(self):
        """Returns TokenType.INTEGER or TokenType.REAL."""
        if self.current_token.type not in Parser.TYPES:
            raise UnexpectedToken(self.current_token)
        return self.eat(self.current_token.type).type

    def compound_statement(self):
        self.eat(TokenType.BEGIN)
        statements = self.statement_list()
        self.eat(TokenType.END)
        return Compound(statements)

    def statement_list(self):
        statements = [self.statement()]
        while self.current_token.type is TokenType.SEMI:
            self.eat(TokenType.SEMI)
            statements.append(self.statement())
        return tuple(statements)

    def statement(self):
        if self.current_token.type is TokenType.BEGIN:
            return self.compound_statement()
        if self.current_token.type is TokenType.ID:
            return self.assignment_statement()
        return NoOp()

    def assignment_statement(self):
        target = self.variable()
        self.eat(TokenType.ASSIGN)
        value = self.expr()
        return Assign(target.id, target, value)

    def variable(self):
        token = self.eat(TokenType.ID)
        return VarRef(token.value, token)

    def expr(self):
        node = self.term()
        while self.current_token.type in Parser.ADDITIVE:
            op = self.eat(self.current_token.type).type
            node = BinaryOp(node, op, self.term())
        return node

    def term(self):
        node = self.factor()
        while self.current_token.type in Parser.MULTIPLICATIVE:
            op = self.eat(self.current_token.type).type
            node = BinaryOp(node, op, self.factor())
        return node

    def factor(self):
        token = self.current_token

        if token.type in Parser.ADDITIVE:
            self.eat(token.type)
            return UnaryOp(token.type, self.factor())

        if token.type is TokenType.INTEGER_CONST:
            self.eat(TokenType.INTEGER_CONST)
            return IntegerLiteral(token.value)

        if token.type is TokenType.REAL_CONST:
            self.eat(TokenType.REAL_CONST)
            return RealLiteral(token.value)

        if token.type is TokenType.LPAREN:
            self.eat(TokenType.LPAREN)
            node = self.expr()
            self.eat(TokenType.RPAREN)
            return node

        if token.type is TokenType.ID:
            return self.variable()

        raise UnexpectedToken(token)

    def parse(self):
        """Parses a whole program and returns its Program node. Anything after the final period is an error."""
        node = self.program()
        if self.current_token.type is not TokenType.EOF:
            raise UnexpectedToken(self.current_token)
        return node


def parse(text):
    """Parses source text into a Program node."""
    return Parser.from_source(text).parse()
