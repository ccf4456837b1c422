# =============================================================================
# codebeat/llms/prompts.py — Prompt builders shared by every provider client
# =============================================================================
# Each builder returns (system, user). JSON-returning capabilities spell out
# the exact keys they expect so every backend answers in the same shape.
# =============================================================================

TRANSLATE_SYSTEM = (
    "You are an expert polyglot programmer. Translate code between programming "
    "languages, preserving behaviour and using idiomatic constructs of the target language."
)

LYRICS_SYSTEM = (
    "You are a professional songwriter. Write original, singable lyrics with a clear "
    "verse/chorus structure."
)

BEAT_SYSTEM = (
    "You are a music producer who designs drum patterns. Answer with JSON only."
)

CODEBEAT_SYSTEM = (
    "You are a creative technologist who turns source code into music. Map the code's "
    "structure (loops, branches, functions, nesting) onto musical ideas. Answer with JSON only."
)

ASSIST_SYSTEM = (
    "You are a helpful assistant for programmers and musicians working on creative "
    "coding and music production projects. Answer clearly and concisely."
)

ANALYZE_SYSTEM = (
    "You are a music critic and lyric analyst. Answer with JSON only."
)


def translate_prompt(
    source_code: str, source_language: str, target_language: str, structured: bool = False
) -> tuple[str, str]:
    user = (
        f"Translate the following {source_language} code to {target_language}.\n\n"
        f"```{source_language}\n{source_code}\n```\n\n"
    )
    if structured:
        user += (
            'Respond with a JSON object: {"translatedCode": string, "explanation": string}. '
            "translatedCode holds only the translated code without markdown fences."
        )
    else:
        user += "Respond with only the translated code, no explanation and no markdown fences."
    return TRANSLATE_SYSTEM, user


def lyrics_prompt(prompt: str, mood: str | None = None, genre: str | None = None) -> tuple[str, str]:
    details = []
    if genre:
        details.append(f"Genre: {genre}")
    if mood:
        details.append(f"Mood: {mood}")
    user = f"Write song lyrics about: {prompt}\n"
    if details:
        user += "\n".join(details) + "\n"
    user += (
        '\nRespond with a JSON object: {"title": string, "lyrics": string, '
        '"structure": array of section names in order}.'
    )
    return LYRICS_SYSTEM, user


def beat_prompt(genre: str, bpm: int, duration: int) -> tuple[str, str]:
    user = (
        f"Design a {genre} drum beat at {bpm} BPM lasting about {duration} seconds.\n"
        'Respond with a JSON object: {"pattern": {"kick": [16 ints 0/1], "snare": [16 ints 0/1], '
        '"hihat": [16 ints 0/1], "openhat": [16 ints 0/1]}, "description": string}. '
        "Each array is one bar of sixteenth notes."
    )
    return BEAT_SYSTEM, user


def codebeat_prompt(code: str, language: str) -> tuple[str, str]:
    user = (
        f"Convert this {language} code into a short piece of music.\n\n"
        f"```{language}\n{code}\n```\n\n"
        'Respond with a JSON object: {"music": string (note sequence in scientific pitch '
        'notation, e.g. "C4 E4 G4"), "mapping": string (how code constructs became musical '
        'elements), "tempo": integer BPM, "key": string}.'
    )
    return CODEBEAT_SYSTEM, user


def assist_prompt(question: str, context: str | None = None) -> tuple[str, str]:
    if context:
        user = f"Context:\n{context}\n\nQuestion:\n{question}"
    else:
        user = question
    return ASSIST_SYSTEM, user


def analyze_prompt(lyrics: str) -> tuple[str, str]:
    user = (
        f"Analyze these lyrics:\n\n{lyrics}\n\n"
        'Respond with a JSON object: {"analysis": string, "themes": array of strings, '
        '"mood": string}.'
    )
    return ANALYZE_SYSTEM, user
