# justyou/services/prompts.py
"""
Prompt templates for the AI features and the journal writing prompts.
"""
import json
import random
from typing import Any, Dict, Iterable, List, Optional

QUIZ_MAX_QUESTIONS = 5
MULTIPLE_CHOICE_POINTS = 5
SHORT_ANSWER_POINTS = 10

QUIZ_GENERATION_TEMPLATE = """Create a quiz based on the following notes. Return ONLY valid JSON, no explanations, markdown, or extra text. Limit the quiz to {max_questions} questions. Each question should be either multiple choice (with 3-4 options) or short answer. For each question, include: id, type, question, options (if multiple choice), and correctAnswer. Do NOT include explanations or grading.

The quiz should be at difficulty level {difficulty} (1 = Beginner, 10 = Harvard-level).

Example format:
{{
  "title": "Quiz Title",
  "questions": [
    {{
      "id": "q1",
      "type": "multiple_choice",
      "question": "...",
      "options": ["A", "B", "C"],
      "correctAnswer": "A"
    }},
    {{
      "id": "q2",
      "type": "short_answer",
      "question": "...",
      "correctAnswer": "..."
    }}
  ]
}}

Notes:
{notes}"""

QUIZ_GRADING_TEMPLATE = """You are a quiz grader. Grade the following answers. For each question, award points ({mc_points} for multiple choice, {sa_points} for short answer), give feedback, and provide a brief explanation. Use partial credit for short answers if appropriate. Return ONLY valid JSON in this format:
[
  {{
    "questionId": "q1",
    "points": {mc_points},
    "maxPoints": {mc_points},
    "feedback": "...",
    "explanation": "...",
    "correctAnswer": "..."
  }}
]

Questions and Answers:
{grading_data}"""

COVER_LETTER_TEMPLATE = """Using the following stories as background about me, write a professional cover letter for this job: {job_description}

My stories:
{stories}"""

OBJECTIVE_TEMPLATE = """I need help modifying my resume objective to better match a job description.

Current Resume Objective:
{current_objective}

Job Description:
{job_description}

Please analyze the job description and modify my resume objective to:
1. Highlight relevant skills and experiences that match the job requirements
2. Use keywords from the job description
3. Make it more specific to this role
4. Keep it concise (2-3 sentences)
5. Maintain a professional tone

Please provide only the modified objective without any explanations."""

RESUME_OPTIMIZER_TEMPLATE = """I need help tailoring my resume to a job description.

Job Description:
{job_description}

My Resume:
{resume_text}

Please rewrite my resume so that it:
1. Emphasizes the experience and skills most relevant to this job
2. Uses keywords from the job description where they truthfully apply
3. Starts bullet points with strong action verbs and quantifies results where possible
4. Does not invent experience, employers, dates or credentials

Please provide only the optimized resume text without any explanations."""


def quiz_generation_prompt(notes: str, difficulty: int) -> str:
    return QUIZ_GENERATION_TEMPLATE.format(max_questions=QUIZ_MAX_QUESTIONS, difficulty=difficulty, notes=notes)


def quiz_grading_prompt(grading_data: List[Dict[str, Any]]) -> str:
    return QUIZ_GRADING_TEMPLATE.format(
        mc_points=MULTIPLE_CHOICE_POINTS,
        sa_points=SHORT_ANSWER_POINTS,
        grading_data=json.dumps(grading_data, indent=2),
    )


def cover_letter_prompt(job_description: str, stories: Iterable[Dict[str, Any]]) -> str:
    stories_text = "\n\n".join(f"Title: {s.get('title', '')}\n{s.get('content', '')}" for s in stories)
    return COVER_LETTER_TEMPLATE.format(job_description=job_description, stories=stories_text)


def objective_prompt(job_description: str, current_objective: str) -> str:
    return OBJECTIVE_TEMPLATE.format(job_description=job_description, current_objective=current_objective)


def resume_optimizer_prompt(job_description: str, resume_text: str) -> str:
    return RESUME_OPTIMIZER_TEMPLATE.format(job_description=job_description, resume_text=resume_text)


# Journal writing prompts shown when composing a story
WRITING_PROMPTS = [
    "Describe a moment that changed your life.",
    "Write about a time you overcame a challenge.",
    "What is a lesson you learned the hard way?",
    "Recall a childhood memory that makes you smile.",
    "Write about a person who inspired you.",
    "Describe your proudest professional achievement.",
    "Write about a time you felt truly at peace.",
    "What is a risk you took that paid off?",
    "Describe a place that feels like home.",
    "Write about a time you helped someone in need.",
    "What is a dream you have for your future?",
    "Describe a failure that taught you something important.",
    "Write about a time you felt out of your comfort zone.",
    "What is a tradition that is important to you?",
    "Describe a time you made a difficult decision.",
    "Write about a moment of unexpected joy.",
    "What is something you wish you could tell your younger self?",
    "Describe a time you stood up for yourself or someone else.",
    "Write about a journey: physical, emotional, or spiritual.",
    "What is a value you try to live by?",
    "Describe a time you felt misunderstood.",
    "Write about a mentor or teacher who impacted you.",
    "What is a goal you are working toward?",
    "Describe a time you had to start over.",
    "Write about a moment of connection with another person.",
]


def random_prompt(exclude: Optional[str] = None, rng: Optional[random.Random] = None) -> str:
    """Pick a writing prompt, never the one currently shown if there is another."""
    rng = rng or random
    choices = [p for p in WRITING_PROMPTS if p != exclude] or WRITING_PROMPTS
    return rng.choice(choices)
