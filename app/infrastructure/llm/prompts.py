def build_diagnosis_prompt(full_name: str, problem: str) -> str:
    return (
        "Você é um técnico especializado em internet, modem e instalações da QI TELECOM.\n"
        "Analise o problema relatado pelo cliente e forneça uma solução técnica detalhada e prática.\n"
        f"O nome do cliente é: {full_name}\n"
        f"PROBLEMA: {problem}\n"
        "\n"
        "Forneça:\n"
        "1. Diagnóstico provável\n"
        "2. Solução passo a passo\n"
        "3. Se não funcionar, próximos passos\n"
        "\n"
        "Seja técnico mas didático, lembrando que você está se relacionando com pessoas leigas no assunto. "
        "Não repita o problema ou o nome do cliente na resposta."
    )


def build_followup_prompt(attempt: int, max_attempts: int, problem: str) -> str:
    return (
        f"Esta é a tentativa {attempt}/{max_attempts} de resolver este problema técnico.\n"
        f"Problema anterior: {problem}\n"
        "\n"
        "Forneça uma solução DIFERENTE e mais avançada. Seja mais específico e didático para uma pessoa leiga. "
        "Tente ser direto ao ponto, sem muita escrita."
    )


def build_free_prompt(question: str) -> str:
    return (
        "Responda de forma útil e amigável em português:\n"
        "\n"
        f"Pergunta: {question}\n"
        "\n"
        "Seja informativo, claro e conciso (máximo 250 palavras)."
    )
