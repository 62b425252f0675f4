from enum import IntEnum


class _LabeledEnum(IntEnum):
    """IntEnum com nome de exibição (pt-BR) em `.label`."""

    def __new__(cls, value: int, label: str):
        obj = int.__new__(cls, value)
        obj._value_ = value
        obj.label = label
        return obj


class EstablishmentType(_LabeledEnum):
    Supermarket = 1, "Mercado"
    ClothingStore = 2, "Loja de Roupas"
    GasStation = 3, "Posto de Combustível"
    OnlineService = 4, "Serviço Online"
    Games = 5, "Games"
    DepartmentStore = 6, "Loja de Departamentos"
    Restaurant = 7, "Restaurante"
    Delivery = 8, "Delivery"
    Charity = 9, "Caridade"
    Church = 10, "Igreja"
    Events = 11, "Eventos"
    Entertainment = 12, "Lazer"
    Pharmacy = 13, "Farmácia"
    Health = 14, "Saúde"
    Transport = 15, "Transporte"
    Services = 16, "Serviços"
    PersonalCare = 17, "Cuidados pessoais"
    ECommerce = 18, "E-Commerce"
    Other = 19, "Outros"


class CardType(_LabeledEnum):
    Credit = 1, "Crédito"
    Debit = 2, "Débito"
    Voucher = 3, "Voucher"


class CardBrand(_LabeledEnum):
    Visa = 1, "Visa"
    Mastercard = 2, "Mastercard"
    Hipercard = 3, "Hipercard"
    Elo = 4, "Elo"


class PaymentType(_LabeledEnum):
    CreditCard = 1, "Cartão de Crédito"
    DebitCard = 2, "Cartão de Débito"
    Pix = 3, "PIX"
    Deposit = 4, "Depósito"

    @property
    def requires_card(self) -> bool:
        return self in (PaymentType.CreditCard, PaymentType.DebitCard)


class MonthlyEntryType(_LabeledEnum):
    Salary = 1, "Salário"
    Tax = 2, "Imposto"
    MonthlyBill = 3, "Conta Mensal"
    Other = 4, "Outros"


class OperationType(_LabeledEnum):
    Income = 1, "Entrada"
    Expense = 2, "Saída"
