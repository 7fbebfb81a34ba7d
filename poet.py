"""graph poet

The :mod:`poet` module reads a corpus once, records how often each word is
followed by another in a :class:`~wordgraph.WordGraph`, and then embellishes
sentences by slipping a *bridge word* between two neighbours whenever the
corpus walks from one to the other in exactly two steps.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from wordgraph import WordGraph

logger = logging.getLogger(__name__)

# Separator used when assembling a poem
JOINER = " "

Corpus = Union[str, Iterable[str]]


def _tokenize(text: str) -> List[str]:
    """Split *text* on runs of whitespace, keeping punctuation attached."""
    return text.split()


def _normalize_token(token: str) -> str:
    """Normalize token for graph lookup (lowercase only)."""
    return token.lower()


def build_graph(corpus: Corpus) -> Tuple[WordGraph[str], int]:
    """Build the adjacency graph for *corpus*.

    Args:
        corpus: A string, or any iterable of text chunks such as an open file.
            Tokens are chained across chunk boundaries.

    Returns:
        The built graph and the number of tokens read.

    Raises:
        OSError: If the corpus stream fails while being read.
    """
    if isinstance(corpus, str):
        corpus = [corpus]

    graph: WordGraph[str] = WordGraph()
    previous: Optional[str] = None
    count = 0
    for chunk in corpus:
        for token in _tokenize(chunk):
            word = _normalize_token(token)
            graph.add_vertex(word)
            if previous is not None:
                graph.increment_edge(previous, word)
            previous = word
            count += 1
    return graph, count


class GraphPoet:
    """Poetry generator backed by a word adjacency graph.

    The graph is built completely in the constructor and never modified
    afterwards, so :meth:`poem` may be called any number of times.
    """

    def __init__(self, corpus: Corpus) -> None:
        graph, tokens = build_graph(corpus)
        self._graph = graph
        logger.debug(
            f"Corpus loaded: {tokens} tokens, {len(graph)} vertices, {graph.edge_count()} edges"
        )

    @classmethod
    def from_text(cls, text: str) -> "GraphPoet":
        return cls(text)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "GraphPoet":
        """Build a poet from the UTF-8 corpus at *path*.

        Raises:
            OSError: If the file is missing, cannot be read, or is not
                valid UTF-8.
        """
        logger.debug(f"Reading corpus from {path}")
        with open(path, "r", encoding="utf-8") as f:
            try:
                return cls(f)
            except UnicodeDecodeError as exc:
                raise OSError(f"corpus {path} is not valid UTF-8: {exc}") from exc

    @property
    def graph(self) -> WordGraph[str]:
        """The corpus graph.  Treat it as read-only."""
        return self._graph

    def bridge(self, first: str, second: str) -> Optional[str]:
        """Return the best bridge word between *first* and *second*.

        A bridge ``x`` needs edges ``first -> x`` (weight w1) and
        ``x -> second`` (weight w2).  The candidate with the largest
        ``w1 * w2`` wins; ties go to the alphabetically smallest word.
        Returns None when no two-edge path exists.
        """
        outgoing = self._graph.targets(_normalize_token(first))
        incoming = self._graph.sources(_normalize_token(second))
        if not outgoing or not incoming:
            return None

        # probe the larger map while walking the smaller one
        small, large = (outgoing, incoming) if len(outgoing) <= len(incoming) else (incoming, outgoing)
        best: Optional[str] = None
        best_score = 0
        for word in small:
            if word not in large:
                continue
            score = outgoing[word] * incoming[word]
            if score > best_score or (score == best_score and word < best):
                best, best_score = word, score

        if best is not None:
            logger.debug(f"Bridge '{first}' -> '{best}' -> '{second}' (score={best_score})")
        return best

    def poem(self, sentence: str) -> str:
        """Insert bridge words into *sentence*.

        Original tokens keep their case and punctuation; inserted words are
        lowercase.  Tokens are joined by single spaces.
        """
        logger.debug(f"Input sentence: '{sentence}'")
        tokens = _tokenize(sentence)
        if len(tokens) < 2:
            return JOINER.join(tokens)

        words = [tokens[0]]
        for first, second in zip(tokens, tokens[1:]):
            between = self.bridge(first, second)
            if between is not None:
                words.append(between)
            words.append(second)

        result = JOINER.join(words)
        logger.debug(f"Final poem: '{result}'")
        return result

    def __str__(self) -> str:
        return str(self._graph)


def main(argv: Optional[List[str]] = None) -> int:
    """Command line entry: ``poet.py CORPUS [SENTENCE...]``."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("usage: poet.py CORPUS [SENTENCE...]", file=sys.stderr)
        return 2

    logging.basicConfig(level=logging.INFO)
    try:
        poet = GraphPoet.from_file(args[0])
    except OSError as exc:
        logger.error(f"cannot read corpus {args[0]}: {exc}")
        return 1

    sentence = " ".join(args[1:]) if len(args) > 1 else input("> ")
    print(poet.poem(sentence))
    return 0


if __name__ == "__main__":  # pragma: no cover - manual exercise
    sys.exit(main())
