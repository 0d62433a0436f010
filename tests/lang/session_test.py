import os
import tempfile
import unittest

from minipas.lang.error import DuplicateId, GenericException, IdNotFound, InvalidCharacter, UnexpectedToken
from minipas.lang.runtime import Integer, Real
from minipas.lang.session import Session

PART14 = """
PROGRAM Main;
   VAR b, x, y : REAL;
   VAR z : INTEGER;

   PROCEDURE AlphaA(a : INTEGER);
      VAR b : INTEGER;

      PROCEDURE Beta(c : INTEGER);
         VAR y : INTEGER;

         PROCEDURE Gamma(c : INTEGER);
            VAR x : INTEGER;
         BEGIN { Gamma }
            x := a + b + c + x + y + z;
         END;  { Gamma }

      BEGIN { Beta }

      END;  { Beta }

   BEGIN { AlphaA }

   END;  { AlphaA }

   PROCEDURE AlphaB(a : INTEGER);
      VAR c : REAL;
   BEGIN { AlphaB }
      c := a + b;
   END;  { AlphaB }

BEGIN { Main }
   b := 3 / 2;
   z := 7 DIV 2;
   x := b * z;
   y := -x + 0.25
END.  { Main }
"""


class SessionTestCase(unittest.TestCase):

    def test_run(self):
        sess = Session(PART14)
        results = sess.run()

        self.assertEqual(
            [("b", Real(1.5)), ("x", Real(4.5)), ("y", Real(-4.25)), ("z", Integer(3))],
            results
        )
        self.assertEqual(
            ["Gamma", "Beta", "AlphaA", "AlphaB", "global"],
            [scope.scope_name for scope in sess.scopes]
        )
        self.assertEqual([4, 3, 2, 2, 1], [scope.scope_level for scope in sess.scopes])

    def test_format(self):
        sess = Session("PROGRAM P1; VAR a,b:INTEGER; BEGIN a:=2; b:=10 DIV a; END.")
        sess.run()

        self.assertEqual(
            "*** Run-time GLOBAL_MEMORY contents: ***\n"
            "a = Integer(2)\n"
            "b = Integer(5)",
            sess.format_results()
        )
        self.assertEqual(
            "SCOPE (SCOPED SYMBOL TABLE)\n"
            "===========================\n"
            "Scope name     : global\n"
            "Scope level    : 1\n"
            "Enclosing scope: None\n"
            "Scope (Scoped symbol table) contents\n"
            "------------------------------------\n"
            "INTEGER = <BuiltinTypeSymbol(name='INTEGER')>\n"
            "REAL = <BuiltinTypeSymbol(name='REAL')>\n"
            "a = <VarSymbol(name='a', type='INTEGER')>\n"
            "b = <VarSymbol(name='b', type='INTEGER')>",
            sess.format_scopes()
        )

    def test_fail_fast(self):
        should_raise = {
            "PROGRAM P; BEGIN a := 1 ! END.": InvalidCharacter,
            "PROGRAM P; BEGIN a := END.": UnexpectedToken,
            "PROGRAM P; VAR a, a : INTEGER; BEGIN END.": DuplicateId,
            "PROGRAM P; BEGIN a := 1 END.": IdNotFound,
        }
        for case, error in should_raise.items():
            sess = Session(case)
            self.assertRaises(error, sess.run)
            self.assertEqual([], sess.results, case)

    def test_analysis_runs_before_interpretation(self):
        sess = Session("PROGRAM P; VAR a : INTEGER; BEGIN a := 1; b := 2 END.")
        self.assertRaises(IdNotFound, sess.run)
        self.assertIsNotNone(sess.tree)
        self.assertEqual([], sess.results)

    def test_from_file(self):
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, "part14.pas")
            with open(path, "w") as file:
                file.write(PART14)

            sess = Session.from_file(path)
            self.assertEqual(path, sess.path)
            self.assertEqual(PART14, sess.source)

            missing = os.path.join(directory, "missing.pas")
            with self.assertRaises(GenericException) as raised:
                Session.from_file(missing)
            self.assertIn("could not be opened", raised.exception.plain_msg)

            undecodable = os.path.join(directory, "latin1.pas")
            with open(undecodable, "wb") as file:
                file.write(b"PROGRAM P; { caf\xe9 } BEGIN END.")
            with self.assertRaises(GenericException) as raised:
                Session.from_file(undecodable)
            self.assertIn("could not be decoded", raised.exception.plain_msg)
            self.assertFalse(raised.exception.internal)

    def test_format_whole_reals(self):
        sess = Session("PROGRAM P; VAR x, y, z : REAL; BEGIN x := 10.0; y := 2.5 * 40; z := 30 / 2 END.")
        sess.run()
        self.assertEqual(
            "*** Run-time GLOBAL_MEMORY contents: ***\n"
            "x = Real(10.0)\n"
            "y = Real(100.0)\n"
            "z = Real(15.0)",
            sess.format_results()
        )


if __name__ == '__main__':
    unittest.main()
