import sys, random
from functools import lru_cache
from typing import Sequence, Any
from boozetools.support.failureprone import SourceText, illustration

from .location import lookup_span, lookup_line, segment_path, segment_text
from .ontology import Phrase, Nom, LoxRuntimeError

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'Blargh', 'Confound it', 'Crud', 'Curses', "Crikey",
		'Drat', 'Fiddlesticks', 'Good Grief', "Great Scott",
		'Jeepers', 'Heavens', 'Nuts', 'Rats',
	]

	resignations = [
		'I cannot continue.',
		'This program will not run as written.',
		'I have no idea what the right answer is.',
		'Something needs fixing.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	""" Collects the issues each pass finds, and explains them to the console when asked. """
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues=10):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	@property
	def issues(self) -> Sequence["Pic"]: return tuple(self._issues)

	def issue(self, it:Any):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the scanner and parser are likely to call:
	def lexical_error(self, guilty:Nom, msg:str):
		self.issue(Pic(msg, [Annotation(guilty)], [_on_line(guilty)]))

	def parse_error(self, guilty:Nom, msg:str):
		where = "at end" if guilty.text == "" else "at '%s'" % guilty.text
		intro = "Error %s: %s" % (where, msg)
		self.issue(Pic(intro, [Annotation(guilty, "got confused here")], [_on_line(guilty)]))

	# Methods the resolver calls:
	def self_reference_in_initializer(self, guilty:Nom):
		intro = "Can't read variable '%s' in its own initializer." % guilty.text
		self.issue(Pic(intro, [Annotation(guilty)], [_on_line(guilty)]))

	def duplicate_parameter(self, first:Nom, again:Nom):
		intro = "Duplicate parameter name '%s'." % again.text
		problem = [Annotation(first, "first"), Annotation(again, "again")]
		self.issue(Pic(intro, problem, [_on_line(again)]))

	def return_at_top_level(self, keyword:Nom):
		intro = "Can't return from top-level code."
		self.issue(Pic(intro, [Annotation(keyword)], [_on_line(keyword)]))

	def break_outside_loop(self, keyword:Nom):
		intro = "Can't use 'break' outside of a loop."
		self.issue(Pic(intro, [Annotation(keyword)], [_on_line(keyword)]))

	def this_outside_class(self, keyword:Nom):
		intro = "Can't use 'this' outside of a class."
		self.issue(Pic(intro, [Annotation(keyword)], [_on_line(keyword)]))

	def super_outside_class(self, keyword:Nom):
		intro = "Can't use 'super' outside of a class."
		self.issue(Pic(intro, [Annotation(keyword)], [_on_line(keyword)]))

	def super_without_superclass(self, keyword:Nom):
		intro = "Can't use 'super' in a class with no superclass."
		self.issue(Pic(intro, [Annotation(keyword)], [_on_line(keyword)]))

	def inherits_from_itself(self, guilty:Nom):
		intro = "A class can't inherit from itself."
		self.issue(Pic(intro, [Annotation(guilty)], [_on_line(guilty)]))

	# Methods for the run-time:
	def runtime_error(self, ex:LoxRuntimeError):
		problem = [Annotation(ex.token, "while evaluating this")]
		self.issue(Pic(ex.message, problem, [_on_line(ex.token)]))

	def escaped_signal(self, site:Phrase, outcome):
		""" The resolver should have made this impossible. """
		intro = "Internal error: %r escaped to the top level." % (outcome,)
		footer = ["This is a bug in the interpreter, not in your program."]
		self.issue(Pic(intro, [Annotation(site, "from here")], footer))
		self.complain_to_console()
		raise AssertionError(intro)

def _on_line(guilty:Phrase) -> str:
	return "[line %d]" % lookup_line(guilty.left())

class Annotation:
	segment: int
	slice: slice
	caption: str
	def __init__(self, node:Phrase, caption:str=""):
		span = lookup_span(*node.span())
		self.segment = span.segment
		self.slice = span.slice
		self.caption = caption
	@property
	def path(self): return segment_path(self.segment)
	def illustrate(self):
		source = _fetch(self.segment)
		row, col = source.find_row_col(self.slice.start)
		single_line = source.line_of_text(row)
		width = max(1, self.slice.stop - self.slice.start)
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self.intro, self._anns, self._footer = intro, anns, footer
	def as_text(self):
		lines = [self.intro, ""]
		segment = None
		for ann in self._anns:
			if ann.segment != segment:
				segment = ann.segment
				if ann.path is not None: lines.append(str(ann.path))
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		return '\n'.join(lines)
	def __repr__(self): return "<Pic %r>" % self.intro

@lru_cache(5)
def _fetch(segment:int) -> SourceText:
	path = segment_path(segment)
	return SourceText(segment_text(segment), filename=None if path is None else str(path))

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
