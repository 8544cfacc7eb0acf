# Add imports
from containerized import Container, Token, inject

GREETING: Token[str] = Token("greeting")


# Declare dependencies as class attributes instead of init args.
class Punctuation:
    mark = "!"


class MessageBuilder:
    greeting = inject(GREETING)
    punctuation = inject(Punctuation)

    def __init__(self, name: str):
        self.name = name

    def get_message(self):
        return f"{self.greeting}, {self.name}{self.punctuation.mark}"


class App:
    def __init__(self):
        self.builder = MessageBuilder("Containers")


# Initialize a Container and bind factories
container = Container()
container.bind(GREETING, lambda: "Bonjour")
punctuation = Punctuation()
container.bind(Punctuation, lambda: punctuation)  # singleton

# Fill an existing object graph; nested objects are wired too
app = App()
container.fill(app)

message = app.builder.get_message()
print(message)

assert message == "Bonjour, Containers!"
# You should see this string as the output of your script
