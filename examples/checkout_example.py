"""
Simple merchant usage example (server-side). Set PSP_API_KEY (and, for LIVE,
PSP_ENVIRONMENT=LIVE plus PSP_LIVE_URL_PREFIX) before running.
"""
import asyncio

from psp_client import Checkout, Client, Config, ApiError


async def run():
    async with Client(Config.from_env()) as client:
        checkout = Checkout(client)
        try:
            response = await checkout.payments.post(
                {
                    "amount": {"currency": "USD", "value": 1000},
                    "merchantAccount": "YourMerchantAccount",
                    "paymentMethod": {
                        "type": "scheme",
                        "number": "4111111111111111",
                        "expiryMonth": "03",
                        "expiryYear": "2030",
                        "cvc": "737",
                        "holderName": "John Smith",
                    },
                    "reference": "order-123",
                    "returnUrl": "https://your-company.com/checkout/return",
                },
                idempotency_key="order-123-payment",
            )
        except ApiError as e:
            print(f"Payment failed: {e!r}")
            return
        print("Result:", response.result_code, response.psp_reference)


if __name__ == "__main__":
    asyncio.run(run())
