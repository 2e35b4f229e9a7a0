"""
A small syntax tree for regular expressions, and an adapter that builds one
from the standard library's own pattern parser.

The capture-group typer only needs to know which characters a sub-pattern
could possibly match, so the node kinds are few. Character classes are kept
as flattened [lo, hi, lo, hi, ...] code-point ranges. Perl classes take their
ASCII meaning here (so \\d is [0-9]), which is what log patterns expect.
"""
import enum
from typing import Iterator, Optional, Sequence
from re import _parser, _constants as sre

MAX_RUNE = 0x10FFFF

class Op(enum.Enum):
	LITERAL = "literal"
	CHAR_CLASS = "class"
	ANY_CHAR = "any"
	ANCHOR = "anchor"
	EMPTY_MATCH = "empty"
	STAR = "star"
	PLUS = "plus"
	QUEST = "quest"
	REPEAT = "repeat"
	CAPTURE = "capture"
	CONCAT = "concat"
	ALTERNATE = "alternate"
	BACKREF = "backref"
	LOOKAROUND = "lookaround"
	OTHER = "other"

class Regexp:
	op: Op
	sub: list["Regexp"]
	runes: list[int]
	cap: int
	name: Optional[str]
	min: int
	max: int

	def __init__(self, op:Op, sub:Sequence["Regexp"]=(), runes:Sequence[int]=(), *, cap=0, name=None, min=0, max=-1):
		self.op = op
		self.sub = list(sub)
		self.runes = list(runes)
		self.cap, self.name = cap, name
		self.min, self.max = min, max

	def walk(self) -> Iterator["Regexp"]:
		""" Depth-first, parents before children. """
		yield self
		for s in self.sub:
			yield from s.walk()

	def __repr__(self):
		if self.op is Op.LITERAL:
			return "<lit %r>" % "".join(map(chr, self.runes))
		if self.op is Op.CHAR_CLASS:
			pairs = zip(self.runes[::2], self.runes[1::2])
			return "<class %s>" % " ".join("%x-%x" % p for p in pairs)
		if self.op is Op.CAPTURE:
			return "<cap %d %r>" % (self.cap, self.sub[0])
		return "<%s %s>" % (self.op.value, " ".join(map(repr, self.sub)))

def literal(text:str) -> Regexp:
	return Regexp(Op.LITERAL, runes=[ord(c) for c in text])

def char_class(*pairs:tuple[int, int]) -> Regexp:
	return Regexp(Op.CHAR_CLASS, runes=_flatten(_normalize(pairs)))

def capture(cap:int, sub:Regexp, name:str=None) -> Regexp:
	return Regexp(Op.CAPTURE, [sub], cap=cap, name=name)

def concat(*sub:Regexp) -> Regexp:
	return Regexp(Op.CONCAT, sub)

def alternate(*sub:Regexp) -> Regexp:
	return Regexp(Op.ALTERNATE, sub)

def capture_names(re:Regexp) -> dict[str, int]:
	return {node.name: node.cap for node in re.walk() if node.op is Op.CAPTURE and node.name}

#########################

_DIGIT = [(0x30, 0x39)]
_SPACE = [(0x09, 0x0A), (0x0C, 0x0D), (0x20, 0x20)]
_WORD = [(0x30, 0x39), (0x41, 0x5A), (0x5F, 0x5F), (0x61, 0x7A)]

def _normalize(pairs) -> list[tuple[int, int]]:
	merged = []
	for lo, hi in sorted(pairs):
		if merged and lo <= merged[-1][1] + 1:
			merged[-1] = (merged[-1][0], max(hi, merged[-1][1]))
		else:
			merged.append((lo, hi))
	return merged

def _complement(pairs) -> list[tuple[int, int]]:
	result, nxt = [], 0
	for lo, hi in _normalize(pairs):
		if lo > nxt:
			result.append((nxt, lo - 1))
		nxt = hi + 1
	if nxt <= MAX_RUNE:
		result.append((nxt, MAX_RUNE))
	return result

def _flatten(pairs) -> list[int]:
	return [r for pair in pairs for r in pair]

_CATEGORIES = {
	sre.CATEGORY_DIGIT: _DIGIT,
	sre.CATEGORY_NOT_DIGIT: _complement(_DIGIT),
	sre.CATEGORY_SPACE: _SPACE,
	sre.CATEGORY_NOT_SPACE: _complement(_SPACE),
	sre.CATEGORY_WORD: _WORD,
	sre.CATEGORY_NOT_WORD: _complement(_WORD),
}

class _Adapter:
	"""
	Translate the (op, argument) pairs of the standard library parser.
	Group names are only known to the parser state, so keep those at hand.
	"""
	def __init__(self, group_names:dict[int, str]):
		self._group_names = group_names

	def sequence(self, items) -> Regexp:
		nodes = []
		for op, av in items:
			node = self.item(op, av)
			if node.op is Op.LITERAL and nodes and nodes[-1].op is Op.LITERAL:
				nodes[-1].runes.extend(node.runes)
			else:
				nodes.append(node)
		if not nodes:
			return Regexp(Op.EMPTY_MATCH)
		if len(nodes) == 1:
			return nodes[0]
		return Regexp(Op.CONCAT, nodes)

	def item(self, op, av) -> Regexp:
		if op is sre.LITERAL:
			return Regexp(Op.LITERAL, runes=[av])
		if op is sre.NOT_LITERAL:
			return Regexp(Op.CHAR_CLASS, runes=_flatten(_complement([(av, av)])))
		if op is sre.IN:
			return self.char_class(av)
		if op is sre.ANY:
			return Regexp(Op.ANY_CHAR)
		if op is sre.AT:
			return Regexp(Op.ANCHOR)
		if op in (sre.MAX_REPEAT, sre.MIN_REPEAT, sre.POSSESSIVE_REPEAT):
			return self.repeat(*av)
		if op is sre.SUBPATTERN:
			group, _add_flags, _del_flags, p = av
			inner = self.sequence(p)
			if group is None:
				return inner
			return Regexp(Op.CAPTURE, [inner], cap=group, name=self._group_names.get(group))
		if op is sre.BRANCH:
			_, branches = av
			return Regexp(Op.ALTERNATE, [self.sequence(b) for b in branches])
		if op is sre.GROUPREF:
			return Regexp(Op.BACKREF, cap=av)
		if op in (sre.ASSERT, sre.ASSERT_NOT):
			_direction, p = av
			return Regexp(Op.LOOKAROUND, [self.sequence(p)])
		if op is sre.ATOMIC_GROUP:
			return Regexp(Op.OTHER, [self.sequence(av)])
		if op is sre.GROUPREF_EXISTS:
			_group, yes, no = av
			return Regexp(Op.OTHER, [self.sequence(p) for p in (yes, no) if p is not None])
		return Regexp(Op.OTHER)

	def repeat(self, lo, hi, p) -> Regexp:
		inner = [self.sequence(p)]
		if hi is sre.MAXREPEAT:
			if lo == 0: return Regexp(Op.STAR, inner)
			if lo == 1: return Regexp(Op.PLUS, inner)
			return Regexp(Op.REPEAT, inner, min=lo, max=-1)
		if (lo, hi) == (0, 1):
			return Regexp(Op.QUEST, inner)
		return Regexp(Op.REPEAT, inner, min=lo, max=hi)

	@staticmethod
	def char_class(items) -> Regexp:
		pairs, negate = [], False
		for op, av in items:
			if op is sre.NEGATE:
				negate = True
			elif op is sre.LITERAL:
				pairs.append((av, av))
			elif op is sre.RANGE:
				pairs.append(av)
			elif op is sre.CATEGORY:
				pairs.extend(_CATEGORIES[av])
			else:
				raise ValueError(op)
		pairs = _complement(pairs) if negate else _normalize(pairs)
		return Regexp(Op.CHAR_CLASS, runes=_flatten(pairs))

def parse(pattern:str) -> Regexp:
	"""
	Build the syntax tree for a pattern.
	Bad patterns raise `re.error`, just as `re.compile` would.
	"""
	parsed = _parser.parse(pattern)
	names = {nr: name for name, nr in parsed.state.groupdict.items()}
	return _Adapter(names).sequence(parsed)
