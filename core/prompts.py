"""
Prompt fragments for lesson and reading generation.
"""

# Configuration
MIN_LESSON_SENTENCES = 5
MAX_LESSON_SENTENCES = 10

# ---- System Prompts ----

SYSTEM_PROMPT_LESSON = "You are a Japanese language teacher who writes graded reading passages."

SYSTEM_PROMPT_READING = "You are a Japanese linguistics expert who provides accurate hiragana readings."

# ---- Lesson Prompt ----

LESSON_INSTRUCTIONS = """Create a short reading passage ({min_sentences}-{max_sentences} sentences) for {level} level students that uses ALL of the following vocabulary and grammar points naturally.
The rest of the text should match {level} level difficulty.

VOCABULARY TO USE:
{vocab_list}

GRAMMAR TO USE:
{grammar_list}

FORMATTING RULES:
1. For ALL kanji in the "japanese" field of each line, include furigana using this syntax: {{kanji|reading}}
   Example: {{食べる|たべる}} or {{日本語|にほんご}}
2. Even single kanji need furigana: {{私|わたし}}, {{今日|きょう}}
3. The title must use the format "{level}: <topic>" (e.g., "{level}: A Day at the Park")
4. "points" lists the vocab/grammar titles from the lists above used in that line (empty if none)
5. "chunks" split the sentence into words/phrases; concatenated, they must form the complete sentence
   (matching "japanese" without furigana syntax)"""

# ---- Reading Prompt ----

READING_INSTRUCTIONS = """Convert the following Japanese vocabulary words to hiragana.
For each item, provide the hiragana reading of the "title" field and keep its "item_id" unchanged.

Input:
{items_json}"""


def format_list(entries: list[str]) -> str:
    """Bullet list, or "(none)" when empty."""
    if not entries:
        return "(none)"
    return "\n".join(f"- {entry}" for entry in entries)
