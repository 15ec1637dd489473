"""Sample schemas and documents shared by the tests."""

ORDER_XSD = """<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">
  <xs:element name="Order">
    <xs:complexType>
      <xs:sequence>
        <xs:element name="Id" type="xs:int"/>
        <xs:element name="Amount" type="xs:decimal"/>
      </xs:sequence>
    </xs:complexType>
  </xs:element>
</xs:schema>
"""

# Well-formed XML, but xs:nosuch does not exist.
UNRESOLVABLE_XSD = """<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">
  <xs:element name="Order" type="xs:nosuch"/>
</xs:schema>
"""

MALFORMED_XSD = """<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">
  <xs:element name="Order">
</xs:schema>
"""

INCLUDING_XSD = """<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">
  <xs:include schemaLocation="types.xsd"/>
  <xs:element name="Payment">
    <xs:complexType>
      <xs:sequence>
        <xs:element name="Amount" type="PositiveAmount"/>
      </xs:sequence>
    </xs:complexType>
  </xs:element>
</xs:schema>
"""

INCLUDED_TYPES_XSD = """<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">
  <xs:simpleType name="PositiveAmount">
    <xs:restriction base="xs:decimal">
      <xs:minExclusive value="0"/>
    </xs:restriction>
  </xs:simpleType>
</xs:schema>
"""

VALID_ORDER = "<Order><Id>1</Id><Amount>9.99</Amount></Order>"
WRONG_TYPE_ORDER = "<Order><Id>abc</Id></Order>"
MALFORMED_ORDER = "<Order><Id>1<Order>"
EXTRA_AMOUNT_ORDER = "<Order><Id>1</Id><Amount>1</Amount><Amount>2</Amount></Order>"
MISSING_AMOUNT_ORDER = "<Order><Id>7</Id></Order>"
WRONG_ROOT = "<Invoice><Id>1</Id><Amount>9.99</Amount></Invoice>"


