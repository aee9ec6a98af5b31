from agents import heuristic_scorer
from agents.types import round_half_up


def test_empty_answer_scores_zero() -> None:
    for answer in ("", "   \n\t", None):
        result = heuristic_scorer.score(answer, "What is a closure?", "hard")
        assert result.score == 0
        assert result.reason == "No answer provided"
        assert result.method == "heuristic"


def test_short_answer_gets_difficulty_base_only() -> None:
    assert heuristic_scorer.score("yes", "", "easy").score == 15
    assert heuristic_scorer.score("yes", "", "medium").score == 20
    assert heuristic_scorer.score("yes", "", "hard").score == 25
    assert heuristic_scorer.score("yes", "", "unknown").score == 15


def test_length_bonus_steps() -> None:
    assert heuristic_scorer.score("abcdefghi", "", "easy").score == 15
    assert heuristic_scorer.score("abcdefghij", "", "easy").score == 20


def test_reason_lists_signals_in_order() -> None:
    result = heuristic_scorer.score("yes", "", "easy")
    assert result.reason == "Heuristic scoring: length (3 chars), relevance (0 terms), difficulty: easy"


def test_code_sample_earns_bonus() -> None:
    result = heuristic_scorer.score("const x = 1;", "", "easy")
    assert heuristic_scorer.has_code("const x = 1;")
    assert result.score == 35
    assert "code examples" in result.reason


def test_keyword_hits_per_category() -> None:
    hits = heuristic_scorer.keyword_hits("React keeps a virtual DOM and diffs each component state update.")
    assert hits == {"frontend": 4}


def test_relevant_answer_beats_irrelevant_answer() -> None:
    question = "How does React use the virtual DOM?"
    relevant = heuristic_scorer.score(
        "React keeps a virtual DOM and diffs each component state update.", question, "medium"
    )
    irrelevant = heuristic_scorer.score("Bananas grow on tall plants in tropical regions", question, "medium")
    assert relevant.score > irrelevant.score
    assert "technical keywords (frontend)" in relevant.reason
    assert "irrelevance penalty" not in relevant.reason


def test_irrelevant_long_answer_is_penalized_and_clamped() -> None:
    result = heuristic_scorer.score("Bananas grow on tall plants in tropical regions", "Explain closures", "easy")
    assert result.score == 0
    assert "relevance (0 terms)" in result.reason
    assert "irrelevance penalty" in result.reason


def test_hedging_needs_two_phrases() -> None:
    assert heuristic_scorer.hedge_count("I think it works") == 1
    single = heuristic_scorer.score("I think the scope is global here", "What is scope?", "easy")
    assert "hedging penalty" not in single.reason
    double = heuristic_scorer.score("I think maybe the scope is global here", "What is scope?", "easy")
    assert "hedging penalty" in double.reason


def test_equivalent_terms_count_as_relevant() -> None:
    assert heuristic_scorer.relevance_matches("Design restful apis", "Each endpoint returns data") >= 1
    assert heuristic_scorer.relevance_matches("", "anything at all") == 0


def test_strong_answer_is_capped_at_100() -> None:
    question = "Explain react component state and node api endpoint caching with mongodb schema design"
    answer = (
        "```js\nconst load = async () => { await fetch(endpoint) }\n```\n"
        "In react each component owns state; a node api endpoint uses caching and memoization. "
        "A promise or closure keeps async work tidy, the mongodb schema is part of the design, "
        "and the algorithm choice affects scalability. " * 2
    )
    result = heuristic_scorer.score(answer, question, "hard")
    assert result.score == 100


def test_scoring_is_deterministic() -> None:
    args = ("Promises chain with .then() and async/await", "Explain promises", "medium")
    assert heuristic_scorer.score(*args) == heuristic_scorer.score(*args)


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(1.49) == 1
    assert round_half_up(69.5) == 70


def test_keyword_bonus_per_category_and_breadth() -> None:
    # one frontend hit: 15 base + 0 length + 2
    assert heuristic_scorer.score("react", "", "easy").score == 17
    # three frontend hits capped at 5: 15 + 5 length + 5
    assert heuristic_scorer.score("react jsx hook", "", "easy").score == 25
    # frontend 2 + backend 2 + 10 for two categories: 15 + 5 length + 14
    assert heuristic_scorer.score("react node", "", "easy").score == 34


def test_relevance_bonus_per_match_and_cap() -> None:
    four = "alpha bravo charlie delta"
    assert heuristic_scorer.relevance_matches(four, four) == 4
    # 15 base + 5 length + 4 * 5
    assert heuristic_scorer.score(four, four, "easy").score == 40

    eight = "alpha bravo charlie delta echo foxtrot golf hotel"
    assert heuristic_scorer.relevance_matches(eight, eight) == 8
    # 15 base + 5 length + min(30, 8 * 5)
    assert heuristic_scorer.score(eight, eight, "easy").score == 50


def test_hedge_penalty_value() -> None:
    assert heuristic_scorer.score("maybe it is", "", "easy").score == 20
    # 15 base + 5 length - 15
    assert heuristic_scorer.score("maybe probably", "", "easy").score == 5
    assert heuristic_scorer.score("maybe probably", "", "hard").score == 15
