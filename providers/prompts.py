from __future__ import annotations  # Prompt templates for question generation, scoring and summaries

from textwrap import dedent


def generation_prompt(role: str) -> str:  # Ask for six questions with a 2/2/2 difficulty mix
    return dedent(
        f"""
        You are an expert technical interviewer. Generate exactly 6 interview questions for a {role} position.

        Requirements:
        - 2 EASY questions (basic concepts, syntax, fundamentals)
        - 2 MEDIUM questions (practical application, problem-solving)
        - 2 HARD questions (system design, complex scenarios, optimization)

        Make sure questions are:
        - Specific to the technologies of the role
        - Progressive in difficulty
        - Practical and relevant to real-world scenarios
        - Fresh for every interview

        Return ONLY a valid JSON array with this exact format:
        [
          {{ "text": "question text here", "difficulty": "easy" }},
          {{ "text": "question text here", "difficulty": "easy" }},
          {{ "text": "question text here", "difficulty": "medium" }},
          {{ "text": "question text here", "difficulty": "medium" }},
          {{ "text": "question text here", "difficulty": "hard" }},
          {{ "text": "question text here", "difficulty": "hard" }}
        ]

        Return ONLY the JSON array, no other text.
        """
    ).strip()


def scoring_prompt(question: str, answer: str, difficulty: str) -> str:  # Ask for a 0-100 score with a reason
    header = dedent(
        """
        You are an expert technical interviewer evaluating a candidate's answer.
        """
    ).strip()
    rubric = dedent(
        """
        Focus on CONTENT RELEVANCE and TECHNICAL ACCURACY, not just length.

        Evaluate this answer based on:
        1. RELEVANCE: Does the answer actually address the question asked? (Most important)
        2. TECHNICAL ACCURACY: Are the technical details correct?
        3. COMPLETENESS: Does it cover the main aspects of the question?
        4. UNDERSTANDING: Does it show genuine understanding vs. just keywords?
        5. PRACTICAL KNOWLEDGE: Does it demonstrate real-world application?

        SCORING GUIDELINES (be strict about relevance):
        - 0-20: Completely irrelevant or wrong answer (including copying the question)
        - 21-40: Partially relevant but major gaps or inaccuracies
        - 41-60: Somewhat relevant with some correct points
        - 61-80: Mostly relevant and technically sound
        - 81-100: Highly relevant, accurate, and comprehensive

        PENALIZE HEAVILY for:
        - Answers that don't address the question
        - Copying the question as an answer (0-10 points)
        - Generic responses with no specific content
        - Technical inaccuracies
        - "I don't know" or "no idea" responses (0-15 points)

        Provide your evaluation in this exact JSON format:
        {
          "score": <number between 0 and 100>,
          "reason": "<2-3 sentence explanation focusing on relevance and accuracy>"
        }

        Return ONLY the JSON object, no other text.
        """
    ).strip()
    return "\n\n".join(
        [
            header,
            f"QUESTION: {question}\nDIFFICULTY: {difficulty}\nCANDIDATE'S ANSWER: {answer}",
            rubric,
        ]
    )


def summary_prompt(profile_json: str, qa_json: str) -> str:  # Ask for the final evaluation object
    rubric = dedent(
        """
        Based on the candidate's performance, provide a comprehensive evaluation including:

        1. Overall Assessment: Brief summary of the candidate's technical knowledge
        2. Strengths: What the candidate did well
        3. Areas for Improvement: Where the candidate needs work
        4. Hiring Recommendation: Should this candidate be hired? (Yes/No/Maybe)
        5. Final Score: Overall score out of 100

        Provide your evaluation in this exact JSON format:
        {
          "summary": "<3-4 sentence professional summary of the candidate's performance>",
          "finalScore": <number between 0 and 100>,
          "hiringRecommendation": "<Yes/No/Maybe with brief reasoning>",
          "strengths": "<2-3 key strengths>",
          "areasForImprovement": "<2-3 areas needing work>"
        }

        Return ONLY the JSON object, no other text.
        """
    ).strip()
    return "\n\n".join(
        [
            "You are an expert technical interviewer reviewing a candidate's performance.",
            f"CANDIDATE PROFILE:\n{profile_json}",
            f"INTERVIEW QUESTIONS AND RESPONSES WITH SCORES:\n{qa_json}",
            rubric,
        ]
    )
