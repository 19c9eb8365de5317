"""
Conversation messages - single source of truth.

This module contains the fixed pt-BR texts sent when the generation
collaborator is absent or fails. Each text is complete on its own: it carries
every piece of domain data the customer needs for the step.
Import from here instead of hardcoding strings in the state machine.
"""


class ConversationMessages:
    """Fallback replies for every step of the ordering dialogue."""

    # Opening
    GREETING = (
        "Boa noite! 👋\n\n"
        "Gostaria de ver nosso cardápio para essa noite?\n\n"
        "Responda *sim* ou *claro* para ver o cardápio."
    )
    MENU_INVITATION = "Quando quiser ver o cardápio, é só dizer *sim* ou *claro*."

    # Dishes
    DISH_MENU = (
        "🍽️ *CARDÁPIO - PRATOS*\n\n"
        "{catalog}\n\n"
        "Digite os *números* dos pratos que deseja (ex: 1 2 ou 1 e 2). "
        "Quando terminar, digite *pronto*."
    )
    NO_DISHES_AVAILABLE = "Nenhum prato disponível no momento."
    NO_DISH_CHOSEN = (
        "Você ainda não escolheu nenhum prato. "
        "Digite os números dos itens (ex: 1 2) ou *pronto* só quando terminar."
    )
    DISH_NUMBERS_PROMPT = "Digite os números dos pratos (ex: 1 2 3) ou *pronto* quando terminar."
    DISHES_NOT_FOUND = (
        "Não encontrei esses números entre os pratos. "
        "Confira o cardápio e digite os números (ex: 1 2) ou *pronto* quando terminar."
    )
    DISHES_ADDED = (
        "Adicionei: {names}.\n\n"
        "Quer mais algum prato? Digite os números ou *pronto* para ir para as bebidas."
    )

    # Drinks
    DRINK_MENU = (
        "Perfeito! Gostaria de algo para beber? 🥤\n\n"
        "*CARDÁPIO - BEBIDAS*\n\n"
        "{catalog}\n\n"
        "Digite os números das bebidas ou *não* se não quiser."
    )
    NO_DRINKS_AVAILABLE = "Nenhuma bebida no momento."
    DRINK_NUMBERS_PROMPT = "Digite os números das bebidas ou *não* se não quiser bebida."
    DRINKS_NOT_FOUND = (
        "Não encontrei esses números entre as bebidas. "
        "Digite os números do cardápio de bebidas ou *não* se não quiser bebida."
    )
    DRINKS_ADDED = (
        "Adicionei: {names}.\n\n"
        "Mais alguma bebida? Digite os números ou *não* para confirmar o pedido."
    )

    # Confirmation
    ORDER_SUMMARY = (
        "Tudo bem! 👍\n\n"
        "Vamos confirmar seu pedido:\n\n"
        "📋 *RESUMO*\n"
        "{lines}\n\n"
        "*Total: {total}*\n\n"
        "Está certo o seu pedido? (sim/não)"
    )
    ORDER_DECLINED = "Pedido cancelado. Quando quiser, mande *oi* para começar de novo."

    # Payment
    PAYMENT_OPTIONS = (
        "Qual será a forma de pagamento?\n\n"
        "*1* - Pix\n"
        "*2* - Dinheiro\n"
        "*3* - Cartão"
    )
    PAYMENT_OPTIONS_INLINE = "1 - Pix, 2 - Dinheiro, 3 - Cartão"
    INVALID_PAYMENT = "Opção inválida. Escolha 1 (Pix), 2 (Dinheiro) ou 3 (Cartão)."
    THANK_YOU = (
        "Ficamos agradecidos pela sua preferência! 🙏\n\n"
        "O valor será cobrado na entrega. Até a próxima!"
    )

    # Recovery
    ORDER_CANCELLED = "Tudo bem, cancelei o seu pedido. Quando quiser, mande *oi* para começar de novo."
    ORDER_NOT_FOUND = "Pedido não encontrado. Comece de novo dizendo *oi*."
    OUT_OF_FLOW = "Mande *oi* ou *boa noite* para começar um pedido."
    APOLOGY = "Desculpe, ocorreu um erro. Tente de novo ou mande *oi* para recomeçar."
