from typing import NamedTuple

SUMMARY_MAX_CHARS = 12000
GENERATION_MAX_CHARS = 10000

TONE_INSTRUCTIONS = {
    "concise": "Create a brief, concise summary highlighting only the key points.",
    "detailed": "Create a comprehensive, detailed summary covering all important aspects.",
    "simple": "Create a simple, easy-to-understand summary suitable for beginners.",
    "academic": "Create an academic-style summary with formal language and structure.",
}


class Prompt(NamedTuple):
    system: str
    user: str


def build_summary_prompt(text: str, tone: str = "concise") -> Prompt:
    instruction = TONE_INSTRUCTIONS.get(tone, TONE_INSTRUCTIONS["concise"])
    user = f"""{instruction}

Format the summary in markdown with:
- Clear headings (##)
- Bullet points for key concepts
- Bold for important terms

Text to summarize:
{text[:SUMMARY_MAX_CHARS]}"""
    return Prompt(
        "You are an expert educational content summarizer. "
        "Create clear, well-structured summaries in markdown format.",
        user,
    )


def build_flashcard_prompt(text: str, count: int = 10) -> Prompt:
    user = f"""Create {count} educational flashcards from the following content.
Each flashcard should have a clear question (front) and a concise answer (back).
Focus on key concepts, definitions, and important facts.

Return exactly {count} flashcards as a JSON array with this structure:
[
  {{
    "front_text": "Question or term",
    "back_text": "Answer or definition",
    "mastery_level": 0
  }}
]

Content:
{text[:GENERATION_MAX_CHARS]}"""
    return Prompt("You are an expert at creating educational flashcards. Return only valid JSON.", user)


def build_quiz_prompt(text: str, question_count: int = 5) -> Prompt:
    user = f"""Create a {question_count}-question multiple choice quiz from the following content.
Each question should have:
- A clear question text
- 4 options (A, B, C, D)
- One correct answer
- An explanation for the correct answer

Return as JSON with this structure:
{{
  "questions": [
    {{
      "question_text": "Question here?",
      "options": [
        {{"option_text": "Option A", "is_correct": false}},
        {{"option_text": "Option B", "is_correct": true}},
        {{"option_text": "Option C", "is_correct": false}},
        {{"option_text": "Option D", "is_correct": false}}
      ],
      "explanation": "Explanation of the correct answer"
    }}
  ]
}}

Content:
{text[:GENERATION_MAX_CHARS]}"""
    return Prompt("You are an expert at creating educational quizzes. Return only valid JSON.", user)
