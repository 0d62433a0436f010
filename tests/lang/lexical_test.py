import unittest

from minipas.lang.error import InvalidCharacter
from minipas.lang.lexical import Lexer, Token, TokenType


def types(text):
    return [token.type for token in Lexer(text)]


class LexerTestCase(unittest.TestCase):

    def test_single_chars(self):
        cases = {
            ";": TokenType.SEMI,
            "*": TokenType.MUL,
            "-": TokenType.MINUS,
            "+": TokenType.PLUS,
            "/": TokenType.REAL_DIV,
            ",": TokenType.COMMA,
            ":": TokenType.COLON,
            "(": TokenType.LPAREN,
            ")": TokenType.RPAREN,
            ".": TokenType.DOT,
            ":=": TokenType.ASSIGN,
        }
        for case, result in cases.items():
            self.assertEqual([result, TokenType.EOF], types(case), case)

    def test_keywords(self):
        cases = {
            "PROGRAM": TokenType.PROGRAM,
            "VAR": TokenType.VAR,
            "BEGIN": TokenType.BEGIN,
            "END": TokenType.END,
            "DIV": TokenType.INTEGER_DIV,
            "PROCEDURE": TokenType.PROCEDURE,
            "INTEGER": TokenType.INTEGER,
            "REAL": TokenType.REAL,
        }
        for case, result in cases.items():
            token = Lexer(case).get_next_token()
            self.assertEqual(result, token.type, case)
            self.assertIsNone(token.value, case)

    def test_keywords_are_case_sensitive(self):
        for case in ["begin", "Begin", "div", "Program", "BEGIN1", "ENDx"]:
            self.assertEqual(Token(TokenType.ID, case, 1, 1), Lexer(case).get_next_token(), case)

    def test_numbers(self):
        cases = {
            "0": Token(TokenType.INTEGER_CONST, 0),
            "42": Token(TokenType.INTEGER_CONST, 42),
            "3.14": Token(TokenType.REAL_CONST, 3.14),
            "2.": Token(TokenType.REAL_CONST, 2.0),
        }
        for case, result in cases.items():
            self.assertEqual(result, Lexer(case).get_next_token(), case)

    def test_second_period_ends_number(self):
        lexer = Lexer("1.2.3")
        self.assertEqual(Token(TokenType.REAL_CONST, 1.2, 1, 1), lexer.get_next_token())
        self.assertEqual(Token(TokenType.DOT, None, 1, 4), lexer.get_next_token())
        self.assertEqual(Token(TokenType.INTEGER_CONST, 3, 1, 5), lexer.get_next_token())

    def test_assign_lookahead(self):
        self.assertEqual([TokenType.ID, TokenType.ASSIGN, TokenType.INTEGER_CONST, TokenType.EOF], types("a:=1"))
        self.assertEqual([TokenType.ID, TokenType.COLON, TokenType.INTEGER, TokenType.EOF], types("a : INTEGER"))
        self.assertEqual([TokenType.COLON, TokenType.EOF], types(":"))

    def test_comments_and_whitespace(self):
        self.assertEqual([TokenType.BEGIN, TokenType.END, TokenType.EOF], types("BEGIN {a comment} \n\t END"))
        self.assertEqual([TokenType.ID, TokenType.RPAREN, TokenType.EOF], types("a {no { nesting } )"))
        self.assertEqual([TokenType.ID, TokenType.EOF], types("a {never closed"))
        self.assertEqual([TokenType.EOF], types(""))
        self.assertEqual([TokenType.EOF], types("  { only a comment }  "))

    def test_positions(self):
        tokens = list(Lexer("PROGRAM Part10;\n  VAR\n    number : INTEGER;"))
        positions = [(token.type, token.line, token.column) for token in tokens]
        self.assertEqual([
            (TokenType.PROGRAM, 1, 1),
            (TokenType.ID, 1, 9),
            (TokenType.SEMI, 1, 15),
            (TokenType.VAR, 2, 3),
            (TokenType.ID, 3, 5),
            (TokenType.COLON, 3, 12),
            (TokenType.INTEGER, 3, 14),
            (TokenType.SEMI, 3, 21),
            (TokenType.EOF, 3, 22),
        ], positions)

    def test_eof_repeats(self):
        lexer = Lexer("x")
        lexer.get_next_token()
        for __ in range(3):
            self.assertEqual(TokenType.EOF, lexer.get_next_token().type)

    def test_invalid_character(self):
        should_raise = {"@": (1, 1), "a := 1 # 2": (1, 8), "BEGIN\n  x_y": (2, 4), "'s'": (1, 1), "é": (1, 1)}
        for case, (line, column) in should_raise.items():
            with self.assertRaises(InvalidCharacter, msg=case) as raised:
                list(Lexer(case))
            self.assertEqual((line, column), raised.exception.position, case)

    def test_token_describe(self):
        self.assertEqual("ID('a')", Token(TokenType.ID, "a").describe())
        self.assertEqual("SEMI", Token(TokenType.SEMI).describe())
        self.assertEqual("Token(INTEGER_CONST(3), position=2:5)", str(Token(TokenType.INTEGER_CONST, 3, 2, 5)))


if __name__ == '__main__':
    unittest.main()
