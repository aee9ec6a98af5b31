"""Lightweight CLI helpers for inspecting interviews and batch scoring answers."""
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import List, Optional, Sequence

from agents.answer_scorer import AnswerScorer, summarize_batch
from agents.types import BatchScore
from config import build_engine_config, settings
from providers import build_adapters
from storage.candidates import CandidateStore


def tail_candidates(limit: int = 20, store: Optional[CandidateStore] = None) -> List[str]:
    store = store or CandidateStore()
    candidates, _ = store.list(sort="-updated_at", limit=limit)
    lines = []
    for candidate in candidates:
        interview = candidate.interview
        answered = sum(1 for question in interview.questions if question.score is not None)
        lines.append(
            f"[{candidate.updated_at}] {candidate.candidate_id} {candidate.name or '-'} "
            f"status={interview.status} answered={answered}/{len(interview.questions)} "
            f"final_score={interview.final_score}"
        )
    for line in lines:
        print(line)
    return lines


def score_file(path: Path, scorer: Optional[AnswerScorer] = None) -> List[BatchScore]:
    """Score a JSON list of ``{question, answer, difficulty}`` objects and print the results."""

    pairs = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(pairs, list):
        raise SystemExit("score file must contain a JSON list")
    if scorer is None:
        cfg = build_engine_config(settings)
        scorer = AnswerScorer(build_adapters(cfg), batch_delay_s=cfg.batch_delay_s)
    results = scorer.score_many(pairs)
    print(json.dumps([result.model_dump() for result in results], indent=2))
    print(json.dumps({"methods": summarize_batch(results)}))
    return results


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--tail-candidates", type=int, help="Show the most recently updated candidates")
    parser.add_argument("--score-file", type=Path, help="Batch score a JSON file of question/answer pairs")
    args = parser.parse_args(argv)

    if args.tail_candidates:
        tail_candidates(args.tail_candidates)
    if args.score_file:
        score_file(args.score_file)


if __name__ == "__main__":
    main()
