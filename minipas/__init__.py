"""minipas: lexer, parser, semantic analyzer and tree-walking interpreter for a small Pascal-like language.

Basic program flow (see minipas.lang.session):
    1. Lexer: converts source text into a pull-based stream of tokens (lang/lexical.py)
    2. Parser: recursive descent over the tokens, producing one immutable AST (lang/syntax.py, lang/tree.py)
    3. Semantic analysis: walks the AST with a stack of scopes, rejecting undeclared or duplicate names
       (lang/semantic.py, lang/symbols.py)
    4. Interpretation: walks the validated AST again and reports the final variable bindings (lang/runtime.py)
"""
