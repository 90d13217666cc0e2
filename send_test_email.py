# send_test_email.py
import sys

from app.core.email_client import send_email


def main():
    if len(sys.argv) < 2:
        print("Usage: python send_test_email.py <recipient@example.com>")
        sys.exit(1)

    print("Sending test email...")

    email_id = send_email(
        to=sys.argv[1],
        subject="[StyleCo] Test Email",
        html="<h1>HTML Test Email</h1><p>This is a <b>test</b> email from the StyleCo backend.</p>",
    )

    print(f"Email accepted by the API (id={email_id}). Check your inbox.")


if __name__ == "__main__":
    main()
