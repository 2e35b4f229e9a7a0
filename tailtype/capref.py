"""
Guess the type of a capture group from what the group can match.

A group which can only match digits and signs is an Int.
Add the decimal point and exponent markers, and it's a Float.
Anything else is still taken as an Int, because that is what
programs written before there were types have always assumed.
"""
from typing import Optional
from .regex_syntax import Regexp, Op
from .types import Type, Int, Float

INT_RUNES = frozenset(map(ord, "+-0123456789"))
FLOAT_RUNES = frozenset(map(ord, "+-0123456789.eE"))

_WRAPPERS = frozenset([Op.STAR, Op.PLUS, Op.REPEAT, Op.QUEST, Op.CAPTURE])

def infer_capref_type(re:Regexp, cap:int) -> Optional[Type]:
	""" None means there is no such group, which is for the caller to sort out. """
	group = capture_group(re, cap)
	if group is None:
		return None
	if group_only_matches(group, INT_RUNES):
		return Int
	if group_only_matches(group, FLOAT_RUNES):
		return Float
	# TODO: String, once arithmetic on text captures is reported rather than assumed.
	return Int

def infer_all_capref_types(re:Regexp) -> dict[int, Type]:
	caps = sorted(node.cap for node in re.walk() if node.op is Op.CAPTURE)
	return {cap: infer_capref_type(re, cap) for cap in caps}

def capture_group(re:Regexp, cap:int) -> Optional[Regexp]:
	""" The capturing node numbered `cap` in `re`, searched depth-first. """
	if re.op is Op.CAPTURE and re.cap == cap:
		return re
	for sub in re.sub:
		r = capture_group(sub, cap)
		if r is not None:
			return r
	return None

def group_only_matches(re:Regexp, allowed:frozenset[int]) -> bool:
	""" True iff every rune `re` can match is among the `allowed` runes. """
	if re.op is Op.LITERAL:
		return all(r in allowed for r in re.runes)
	if re.op is Op.CHAR_CLASS:
		for lo, hi in zip(re.runes[::2], re.runes[1::2]):
			if hi - lo + 1 > len(allowed):
				return False
			if not all(r in allowed for r in range(lo, hi + 1)):
				return False
		return True
	if re.op in _WRAPPERS:
		return group_only_matches(re.sub[0], allowed)
	if re.op in (Op.CONCAT, Op.ALTERNATE):
		return all(group_only_matches(sub, allowed) for sub in re.sub)
	return False
