def build_prompt(question: str) -> str:
    # первая буква заглавная, остальное строчными (на случай CAPS LOCK)
    return question[:1].upper() + question[1:].lower()
