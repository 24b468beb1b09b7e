"""Element names read from payment documents."""

# Currency code of the document amount
CURRCODE = "CurrCode"
