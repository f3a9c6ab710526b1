"""
A simple, light-weight way to pass-around and manipulate points and spans within
a collection of source texts. Every token the scanner produces gets an integer
index here; spans of those indices are associated with a specific segment of text,
which might have come from a file, the REPL, or a test case.
Nothing is ever dropped: a function from an early REPL line may fail much
later, and the diagnostic still needs to show its text.
"""
from bisect import bisect_right
from pathlib import Path
from typing import NamedTuple, Optional

class Span(NamedTuple):
	""" Aimed at whatever prints error messages """
	segment: int
	slice: slice

_slices: list[slice] = []
_lines: list[int] = []
_bounds: list[int] = []
_paths: list[Optional[Path]] = []
_texts: list[str] = []

def reset_location_index():
	for it in _slices, _lines, _bounds, _paths, _texts: it.clear()
	# Now prepare the "built-in" location, which is location zero:
	start_segment(None, "")
	insert_token(slice(0,0), 0)

def start_segment(path:Optional[Path], text:str) -> int:
	assert isinstance(path, Path) or path is None
	_bounds.append(len(_slices))
	_paths.append(path)
	_texts.append(text)
	return len(_paths) - 1

def insert_token(s:slice, line:int) -> int:
	index = len(_slices)
	_slices.append(s)
	_lines.append(line)
	return index

def lookup_token(index:int) -> Span:
	segment_index = bisect_right(_bounds, index)-1
	return Span(segment_index, _slices[index])

def lookup_span(first: int, last:int) -> Span:
	left = lookup_token(first)
	right = lookup_token(last)
	assert left.segment == right.segment
	return Span(left.segment, slice(left.slice.start, right.slice.stop))

def lookup_line(index:int) -> int:
	return _lines[index]

def segment_path(segment:int) -> Optional[Path]: return _paths[segment]
def segment_text(segment:int) -> str: return _texts[segment]

reset_location_index()
