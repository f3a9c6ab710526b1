"""
Break source text into tokens.

The lexical rules are a booze-tools miniscan definition. Its actions only
say what kind of thing matched and where; the `Scanner` below turns that
stream into proper tokens, with line numbers and literal values.

Each token is entered into the location index, so that any diagnostic
can later point at the exact bit of text responsible.
"""
import sys
from pathlib import Path
from typing import NamedTuple, Any, Optional
from boozetools.scanning.engine import IterableScanner
from boozetools.scanning.miniscan import Definition
from . import location
from .ontology import Nom
from .diagnostics import Report

RESERVED = frozenset("""
	AND BREAK CLASS ELSE FALSE FOR FUN IF NIL OR
	PRINT RETURN SUPER THIS TRUE VAR WHILE
""".split())

class Token(NamedTuple):
	kind: str     # Punctuation plays itself; reserved words are upper-case.
	value: Any    # Number and string literals carry their meaning here.
	nom: Nom
	line: int

	@property
	def text(self): return self.nom.text

###############################################################################

LEX = Definition("Lox")

def _mark(kind:str):
	def action(yy:IterableScanner): yy.token(kind, yy.slice())
	return action

def _begin(condition:str, kind:str):
	def action(yy:IterableScanner):
		yy.token(kind, yy.slice())
		yy.enter(condition)
	return action

LEX.ignore(r"\s+")
LEX.ignore(r"\/\/.*")
LEX.on(r"\/\*")(_begin("comment", "open_comment"))
LEX.on(r"\d+(\.\d+)?")(_mark("number"))
LEX.on(r"[\l_][\w_]*")(_mark("word"))
LEX.on('"')(_begin("string", "open_string"))
LEX.on(r"[!=<>]=?")(_mark("punctuation"))
LEX.on(r"[-(){},.+;*\/]")(_mark("punctuation"))
LEX.on(r"{ANY}")(_mark("mystery"))

with LEX.condition("comment") as comment:
	@comment.on(r"\*\/")
	def _close_comment(yy:IterableScanner): yy.enter(None)
	comment.ignore(r"{ANY}")

with LEX.condition("string") as string:
	@string.on('"')
	def _close_string(yy:IterableScanner):
		yy.enter(None)
		yy.token("close_string", yy.slice())
	string.ignore(r"{ANY}")

###############################################################################

class Scanner:
	"""
	One scanner per chunk of text. The `scan_*` methods correspond
	to the kinds of mark the lexical rules above put out.
	"""
	def __init__(self, text:str, report:Report, path:Optional[Path]=None):
		self._text = text
		self._report = report
		self._line, self._seen = 1, 0
		self._opened = None
		self.tokens = []
		location.start_segment(path, text)

	def scan(self) -> list[Token]:
		yy = LEX.scan(self._text)
		for kind, s in yy:
			getattr(self, "scan_"+kind)(s)
		if yy.condition == "comment": self._complain(*self._opened, "Unterminated comment.")
		elif yy.condition == "string": self._complain(*self._opened, "Unterminated string.")
		end = len(self._text)
		self._emit("EOF", None, slice(end, end), self._line_at(end))
		return self.tokens

	def _line_at(self, offset:int) -> int:
		""" Marks arrive in order, so counting newlines since the last one suffices. """
		self._line += self._text.count("\n", self._seen, offset)
		self._seen = offset
		return self._line

	def _emit(self, kind:str, value, s:slice, line:int) -> Token:
		spot = location.insert_token(s, line)
		token = Token(kind, value, Nom(sys.intern(self._text[s]), spot), line)
		self.tokens.append(token)
		return token

	def _complain(self, s:slice, line:int, msg:str):
		spot = location.insert_token(s, line)
		self._report.lexical_error(Nom(self._text[s], spot), msg)

	def scan_open_comment(self, s:slice):
		self._opened = s, self._line_at(s.start)

	def scan_open_string(self, s:slice):
		self._opened = s, self._line_at(s.start)

	def scan_close_string(self, s:slice):
		opening, line = self._opened
		self._emit("string", self._text[opening.stop:s.start], slice(opening.start, s.stop), line)

	def scan_number(self, s:slice):
		self._emit("number", float(self._text[s]), s, self._line_at(s.start))

	def scan_word(self, s:slice):
		word = self._text[s]
		upper = word.upper()
		kind = upper if upper in RESERVED and upper.lower() == word else "identifier"
		self._emit(kind, None, s, self._line_at(s.start))

	def scan_punctuation(self, s:slice):
		self._emit(sys.intern(self._text[s]), None, s, self._line_at(s.start))

	def scan_mystery(self, s:slice):
		self._complain(s, self._line_at(s.start), "Unexpected character.")

def scan(text:str, report:Report, path:Optional[Path]=None) -> list[Token]:
	return Scanner(text, report, path).scan()
