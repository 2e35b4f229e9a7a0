import sys, random
from typing import Any, Optional, Sequence
from boozetools.support.failureprone import SourceText, illustration

from .syntax import Phrase, CaptureRef, Declaration
from .unification import UnificationFailed

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]
	minced_oaths = ['Drat', 'Rats', 'Fiddlesticks', 'Good Grief', 'Confound it', 'Nuts', 'Crud']
	resignations = [
		'That does not type.',
		'I cannot make these types agree.',
		'Something here is not what it claims to be.',
	]
	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	""" Collects the issues found while checking one program. """
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues=3, source:Optional[SourceText]=None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues
		self._source = source

	@property
	def issues(self) -> list["Pic"]: return list(self._issues)

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	def issue(self, it:Any):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

	def set_source(self, text:Optional[str], filename:str=None):
		self._source = None if text is None else SourceText(text, filename=filename)

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def error(self, guilty: Sequence[Phrase], msg: str):
		""" Actually make an entry of an issue """
		for g in guilty: assert isinstance(g, Phrase), g
		problem = [self._annotate(g) for g in guilty]
		self.issue(Pic(msg, problem))

	def _annotate(self, node:Phrase, caption:str="") -> "Annotation":
		return Annotation(node, caption, self._source)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		if self._issues:
			print("*"*60, file=sys.stderr)
			print(_outburst(), file=sys.stderr)
		for i in self._issues:
			print("  -"*20, file=sys.stderr)
			print(i.as_text(), file=sys.stderr)
		sys.stderr.flush()

	def assert_no_issues(self, message="There should be no issues."):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the type checker calls:

	def type_mismatch(self, site:Phrase, failure:UnificationFailed):
		intro = "Types for this expression need to match, but they do not."
		caption = "%s versus %s" % (failure.prior_text, failure.term_text)
		self.issue(Pic(intro, [self._annotate(site, caption)], [str(failure)]))

	def recursive_type(self, site:Phrase, failure:UnificationFailed):
		pattern = "This tries to equate %s with %s which contains it, but a type cannot be part of itself."
		intro = pattern % (failure.prior_text, failure.term_text)
		self.issue(Pic(intro, [self._annotate(site)]))

	def undefined_name(self, site:Phrase, name:str):
		intro = "I don't see what '%s' refers to." % name
		self.issue(Pic(intro, [self._annotate(site)]))

	def bad_type_name(self, decl:Declaration):
		intro = "'%s' is not the name of a type." % decl.type_name
		self.issue(Pic(intro, [self._annotate(decl)], ["The types are Int, Float, and String."]))

	def no_such_capture_group(self, site:CaptureRef):
		intro = "The pattern has no capture group $%s." % site.ref
		self.issue(Pic(intro, [self._annotate(site)]))

	def outside_pattern(self, site:CaptureRef):
		intro = "Capture reference $%s is not inside any pattern block." % site.ref
		self.issue(Pic(intro, [self._annotate(site)]))

class Annotation:
	caption: str
	def __init__(self, node:Phrase, caption:str="", source:Optional[SourceText]=None):
		self.node = node
		self.slice = node.span
		self.caption = caption
		self._source = source
	def illustrate(self):
		if self._source is None or self.slice is None:
			return "  %r %s" % (self.node, self.caption)
		source = self._source
		row, col = source.find_row_col(self.slice.start)
		single_line = source.line_of_text(row)
		width = self.slice.stop - self.slice.start
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self.intro, self._anns, self._footer = intro, anns, footer
	def as_text(self):
		lines = [self.intro, ""]
		lines.extend(ann.illustrate() for ann in self._anns)
		lines.extend(self._footer)
		return '\n'.join(lines)
	def __str__(self): return self.intro
