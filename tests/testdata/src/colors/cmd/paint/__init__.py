from colors.red import RED


def main():
    print(RED)
