from utils.helpers import greet

if __name__ == "__main__":
    print(greet("world"))
