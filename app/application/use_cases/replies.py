from __future__ import annotations

PLAN_LIST = (
    "• *QI FIBRA BASIC*\n"
    "  300 Mega + QI TV PLAY + IPV6\n"
    "\n"
    "• *QI FIBRA PREMIUM*\n"
    "  600 Mega + QI TV PLAY + IPV6 + QUALIDADE QI\n"
    "\n"
    "• *QI FIBRA PREMIUM (MELHOR)*\n"
    "  650 Mega + QI TV PLAY + IPV6 + PARAMOUNT + WATCH TV\n"
    "\n"
    "• *QI FIBRA PREMIUM TOP*\n"
    "  700 Mega + QI TV PLAY + IPV6 + PARAMOUNT + WATCH TV"
)

MAIN_MENU = (
    "*QI TELECOM | Menu Principal 🛰️*\n"
    "\n"
    "Bem-vindo ao QIChatBot!\n"
    "Digite apenas o *número* da opção desejada:\n"
    "\n"
    "[1] Suporte Técnico\n"
    "    - Problemas com internet, modem ou instalação\n"
    "\n"
    "[2] Planos e Serviços\n"
    "    - Conhecer planos ou solicitar upgrade\n"
    "\n"
    "[3] Boleto e Financeiro\n"
    "    - Segunda via e questões financeiras\n"
    "\n"
    "[4] Assistente Livre\n"
    "    - Chat livre para qualquer dúvida\n"
    "\n"
    "Digite sua opção (1-4):"
)

BILLING_INFO = (
    "💰 *Boleto e Financeiro*\n"
    "\n"
    "Para *segunda via* ou dúvidas financeiras, utilize os canais oficiais:\n"
    "\n"
    "*Unidade / Responsável*\n"
    "Francisco Alves: Av. Brigadeiro Faria Lima 703 - Centro | (44) 3643-1736\n"
    "\n"
    "Iporã: Rua Katsuo Nakata 1115 - Centro | (44) 98402-7130 / (44) 3199-9115\n"
    "\n"
    "Palotina: Aldir Pedron 1319 - Centro | (44) 3649-1486\n"
    "\n"
    "Terra Roxa: Av. da Saudade 369 - Centro | (44) 3645-3257\n"
    "\n"
    "⚠️ *Aplicativo de boletos em desenvolvimento. Em breve novidades.*\n"
    "\n"
    "Digite MENU para voltar ao menu principal."
)

SUPPORT_SELECTED = "🔧 *Suporte Técnico Selecionado*\n\nPara melhor atendê-lo, preciso do seu *nome completo*:"
PLANS_SELECTED = (
    "📋 *Planos e Serviços*\n\nVocê já é cliente QI TELECOM? Responda *SIM* ou *NÃO*.\n\n"
    "(Após responder, mostrarei as opções de planos.)"
)
FREE_ASSISTANT_SELECTED = (
    "🤖 *Assistente Livre Ativado*\n\nAgora você pode fazer qualquer pergunta que quiser! Estou aqui para ajudar."
)

YES_NO_REPROMPT = "Por favor, responda *SIM* ou *NÃO*."
DIAGNOSIS_REPROMPT = "Por favor, responda apenas *SIM* ou *NÃO* para que eu possa ajudá-lo melhor."
RATING_REPROMPT = "Poderia nos dar uma *avaliação* do atendimento? (Ex: Excelente, Bom, Regular...)"

PROBLEM_RESOLVED = (
    "🎉 *Ótimo! Problema resolvido!*\n\n"
    "Poderia nos dar um *feedback/opinião* sobre nosso atendimento? (Ex: Excelente, Bom, Regular...)"
)
ESCALATED = (
    "🚨 *Encaminhamento para Técnico Especializado*\n\n"
    "📅 Prazo: 24-48 horas\n📞 Entraremos em contato.\n\n"
    "Antes de finalizar, poderia avaliar nosso atendimento? (Ex: Excelente, Bom, Regular...)"
)
ASK_COMMENT = (
    "💭 *Obrigado pela avaliação!*\n\n"
    "Para finalizar, tem alguma *sugestão* ou *comentário* para melhorarmos nosso atendimento?\n\n"
    "*(Digite sua sugestão ou 'NÃO' se não tiver)*"
)
FEEDBACK_RECORDED = (
    "🙏 *Feedback registrado com sucesso!* \n\n"
    "Sua opinião é muito importante para melhorarmos nossos serviços.\n\n"
    "Digite *MENU* para voltar ao menu principal."
)

CURRENT_CUSTOMER = "👤 *Cliente Atual Identificado*\n\nQual seu *plano atual*? Digite exatamente uma das opções abaixo:\n\n" + PLAN_LIST
NEW_CUSTOMER = "🆕 *Novo Cliente - Bem-vindo!*\n\nPerfeito! Qual plano desperta seu interesse?\n\n" + PLAN_LIST
KEEP_PLAN = (
    "✅ *Entendido!*\n\n"
    "Você optou por manter seu plano atual. Se mudar de ideia, estaremos aqui!\n\n"
    "Digite *MENU* para voltar ao menu principal."
)
ASK_CONTACT_NAME = "📝 *Dados para Contato*\n\nPara avançar, preciso do seu *nome completo*:"
ASK_PHONE = "📞 Agora informe um *telefone/WhatsApp* para contato (somente números ou formato (XX) XXXXX-XXXX):"


def ask_problem(full_name: str) -> str:
    return f"Obrigado, {full_name}! 👋\n\nAgora, descreva detalhadamente o problema técnico que você está enfrentando:"


def upgrade_options(current_plan: str) -> str:
    return f"📋 *Plano Atual: {current_plan}*\n\nGostaria de fazer *upgrade*? Veja nossas opções superiores:\n\n{PLAN_LIST}"


def plans_registered(name: str, situation: str, desired_plan: str, phone: str) -> str:
    return (
        "🎉 *Dados Registrados com Sucesso!*\n\n"
        f"*Nome*: {name}\n"
        f"*Situação*: {situation}\n"
        f"*Plano Interesse*: {desired_plan}\n"
        f"*Telefone*: {phone}\n\n"
        "📞 *Próximos Passos*:\n"
        "Nossa equipe comercial entrará em contato em até 24 horas para finalizar!\n\n"
        "Digite *MENU* para voltar ao menu principal."
    )


def plans_notes(desired_plan: str, current_plan: str) -> str:
    return f"Interesse em: {desired_plan} | Plano atual: {current_plan}"
