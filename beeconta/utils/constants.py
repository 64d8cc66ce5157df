"""
Table names and status vocabulary of the BeeConta Supabase schema.

The remote schema uses Portuguese names and gendered status values
('ativo' for companies, 'ativa' for accounts). These strings are the
contract with the existing store and must not be translated.
"""

TABLES = {
    'USERS': 'usuarios',
    'COMPANIES': 'empresas',
    'GROUPS': 'grupos_economicos',
    'DIRECT_ACCESS': 'acessos_usuario_empresa',
    'GROUP_ACCESS': 'acessos_usuario_grupo',
    'GROUP_ASSOCIATIONS': 'associacoes_empresa_grupo',
    'BANK_ACCOUNTS': 'contas_bancarias',
    'BANKS': 'bancos',
    'CURRENCIES': 'moedas',
    'CREDIT_CARDS': 'cartoes_credito',
    'TRANSACTIONS': 'transacoes',
    'CATEGORIES': 'categorias',
}

# Companies, groups, access grants, associations, banks
STATUS_ACTIVE = 'ativo'
STATUS_INACTIVE = 'inativo'

# Bank accounts, currencies, categories
STATUS_ACTIVE_F = 'ativa'
STATUS_INACTIVE_F = 'inativa'

# Soft-delete targets
BANK_ACCOUNT_CLOSED = 'encerrada'
CREDIT_CARD_CANCELLED = 'cancelado'
TRANSACTION_CANCELLED = 'cancelada'

TRANSACTION_PENDING = 'pendente'
TRANSACTION_SETTLED = 'efetivada'

# Access levels on acessos_usuario_empresa / acessos_usuario_grupo
ACCESS_ADMIN = 'ADMIN'
ACCESS_EDITOR = 'EDITOR'
ACCESS_VIEWER = 'VISUALIZADOR'

# Column list embedded when a company is joined through an access row
COMPANY_EMBED_COLUMNS = (
    "id, nome, nome_fantasia, url_logo, status, cnpj_cpf, tipo_documento"
)
