# app/snippets.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from app import config


@dataclass(frozen=True)
class Snippet:
    title: str
    code: str
    language: str


def _snippets(language: str, *pairs) -> List[Snippet]:
    return [Snippet(title=t, code=c, language=language) for t, c in pairs]


# -------- Built-in catalog --------
CODE_SNIPPETS: Dict[str, List[Snippet]] = {
    "javascript": _snippets(
        "javascript",
        (
            "Array Methods",
            """const numbers = [1, 2, 3, 4, 5];
const doubled = numbers.map(num => num * 2);
const sum = numbers.reduce((acc, curr) => acc + curr, 0);
const evenNumbers = numbers.filter(num => num % 2 === 0);""",
        ),
        (
            "Async Function",
            """async function fetchData() {
    try {
        const response = await fetch('https://api.example.com/data');
        const data = await response.json();
        return data;
    } catch (error) {
        console.error('Error:', error);
    }
}""",
        ),
        (
            "Class Definition",
            """class User {
    constructor(name, email) {
        this.name = name;
        this.email = email;
    }

    getInfo() {
        return `${this.name} (${this.email})`;
    }

    static createAdmin(name) {
        return new User(name, `${name.toLowerCase()}@admin.com`);
    }
}""",
        ),
        (
            "Promise Chain",
            """function processUserData(userId) {
    return fetchUser(userId)
        .then(user => validateUser(user))
        .then(user => updateUserStatus(user))
        .then(user => saveUserData(user))
        .catch(error => handleError(error));
}""",
        ),
    ),
    "python": _snippets(
        "python",
        (
            "List Comprehension",
            """numbers = [1, 2, 3, 4, 5]
squares = [num ** 2 for num in numbers]
even_numbers = [num for num in numbers if num % 2 == 0]""",
        ),
        (
            "Class Definition",
            """class Person:
    def __init__(self, name, age):
        self.name = name
        self.age = age

    def greet(self):
        return f"Hello, my name is {self.name} and I am {self.age} years old.\"""",
        ),
        (
            "Decorator Pattern",
            """def timer_decorator(func):
    def wrapper(*args, **kwargs):
        import time
        start = time.time()
        result = func(*args, **kwargs)
        end = time.time()
        print(f"Function {func.__name__} took {end - start} seconds")
        return result
    return wrapper

@timer_decorator
def slow_function():
    import time
    time.sleep(1)
    return "Done!\"""",
        ),
        (
            "Context Manager",
            """class DatabaseConnection:
    def __init__(self, host, port):
        self.host = host
        self.port = port
        self.connection = None

    def __enter__(self):
        self.connection = connect(self.host, self.port)
        return self.connection

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.connection:
            self.connection.close()""",
        ),
    ),
    "java": _snippets(
        "java",
        (
            "Class with Interface",
            """public class Calculator implements MathOperations {
    @Override
    public double add(double a, double b) {
        return a + b;
    }

    @Override
    public double subtract(double a, double b) {
        return a - b;
    }

    @Override
    public double multiply(double a, double b) {
        return a * b;
    }
}""",
        ),
        (
            "Exception Handling",
            """public class FileProcessor {
    public void processFile(String filename) {
        try (BufferedReader reader = new BufferedReader(new FileReader(filename))) {
            String line;
            while ((line = reader.readLine()) != null) {
                processLine(line);
            }
        } catch (IOException e) {
            logger.error("Error processing file: " + e.getMessage());
            throw new ProcessingException("Failed to process file", e);
        }
    }
}""",
        ),
        (
            "Lambda Expressions",
            """List<String> names = Arrays.asList("Alice", "Bob", "Charlie");
names.stream()
    .filter(name -> name.length() > 4)
    .map(String::toUpperCase)
    .forEach(System.out::println);""",
        ),
    ),
    "cpp": _snippets(
        "cpp",
        (
            "Template Class",
            """template<typename T>
class Stack {
private:
    std::vector<T> elements;
public:
    void push(T const& element) {
        elements.push_back(element);
    }

    T pop() {
        if (elements.empty()) {
            throw std::out_of_range("Stack is empty");
        }
        T element = elements.back();
        elements.pop_back();
        return element;
    }
};""",
        ),
        (
            "Smart Pointers",
            """class Resource {
public:
    Resource() { std::cout << "Resource acquired\n"; }
    ~Resource() { std::cout << "Resource released\n"; }
};

void processResource() {
    std::unique_ptr<Resource> ptr = std::make_unique<Resource>();
    // Resource will be automatically released when ptr goes out of scope
}""",
        ),
        (
            "Move Semantics",
            """class String {
private:
    char* data;
    size_t size;
public:
    // Move constructor
    String(String&& other) noexcept
        : data(other.data), size(other.size) {
        other.data = nullptr;
        other.size = 0;
    }

    // Move assignment operator
    String& operator=(String&& other) noexcept {
        if (this != &other) {
            delete[] data;
            data = other.data;
            size = other.size;
            other.data = nullptr;
            other.size = 0;
        }
        return *this;
    }
};""",
        ),
    ),
}

LANGUAGES: List[str] = list(CODE_SNIPPETS)

GENERATED_TITLE = "AI Generated Snippet"
_GENERATED_CODE = {
    "python": "# AI generated code would go here\n# This is a placeholder for the actual AI integration",
}
_GENERATED_DEFAULT = "// AI generated code would go here\n// This is a placeholder for the actual AI integration"


# -------- public API --------
def list_snippets(language: str) -> List[Snippet]:
    """Snippets for a language, or an empty list when the language is unknown."""
    return list(CODE_SNIPPETS.get(language, ()))


def find_snippet(language: str, title: str) -> Optional[Snippet]:
    for snippet in CODE_SNIPPETS.get(language, ()):
        if snippet.title == title:
            return snippet
    return None


def language_for_path(path) -> Optional[str]:
    """Map an uploaded file to a catalog language by extension."""
    return config.UPLOAD_EXTENSIONS.get(Path(path).suffix.lower())


def generate_snippet(language: str, difficulty: str = "medium") -> Snippet:
    """
    Stand-in for an AI snippet service. Always returns the same placeholder,
    commented in the syntax of the requested language.
    """
    code = _GENERATED_CODE.get(language, _GENERATED_DEFAULT)
    return Snippet(title=GENERATED_TITLE, code=code, language=language)
